"""
Error taxonomy shared by the ingestion, scoring and cover-letter pipelines.

Every error carries the HTTP status it maps to; ``main.py`` turns them into
``{"detail": message, **extra}`` responses. Batch operations catch these per
unit of work instead of letting them escape.
"""


class JobBotError(Exception):
    status_code = 500

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra


class ValidationError(JobBotError):
    status_code = 400


class ConfigurationError(JobBotError):
    status_code = 400


class DuplicateError(JobBotError):
    status_code = 409

    def __init__(self, message: str, job_id: str | None = None):
        super().__init__(message, job_id=job_id)
        self.job_id = job_id


class TransportError(JobBotError):
    status_code = 422

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message, upstream_status=upstream_status)
        self.upstream_status = upstream_status


class FetchTimeoutError(TransportError):
    pass


class TooShortError(JobBotError):
    status_code = 422


class IncompleteExtractionError(JobBotError):
    status_code = 422


class ExtractionError(JobBotError):
    status_code = 500


class NoJsonFound(ExtractionError):
    pass


class InvalidJson(ExtractionError):
    pass


class CompletionError(JobBotError):
    status_code = 500


class PersistenceError(JobBotError):
    status_code = 500
