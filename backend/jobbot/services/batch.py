"""
Best-effort mapping for batch pipelines: one bad item never sinks the batch.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ItemFailure:
    label: str
    error: Exception

    @property
    def message(self) -> str:
        return f"{self.label}: {self.error}"


@dataclass
class BatchOutcome(Generic[R]):
    succeeded: list[R] = field(default_factory=list)
    failed: list[ItemFailure] = field(default_factory=list)


def best_effort_map(
    items: Iterable[T],
    operation: Callable[[T], R],
    label: Callable[[T], str] = str,
    on_failure: Callable[[T, Exception], None] | None = None,
) -> BatchOutcome[R]:
    """Run ``operation`` on each item in order, collecting results and labeled failures."""
    outcome: BatchOutcome[R] = BatchOutcome()
    for item in items:
        try:
            outcome.succeeded.append(operation(item))
        except Exception as exc:
            failure = ItemFailure(label=label(item), error=exc)
            logger.warning("Skipping %s", failure.message)
            if on_failure is not None:
                on_failure(item, exc)
            outcome.failed.append(failure)
    return outcome
