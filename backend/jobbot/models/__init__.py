from jobbot.models.company import Company
from jobbot.models.job import Job
from jobbot.models.cover_letter import CoverLetter
from jobbot.models.application import Application
from jobbot.models.bot_setting import BotSetting
from jobbot.models.ai_usage_log import AiUsageLog

__all__ = ["Company", "Job", "CoverLetter", "Application", "BotSetting", "AiUsageLog"]
