from typing import Any

from fastapi import APIRouter, Depends

from jobbot.dependencies import get_settings_repo
from jobbot.schemas.settings import SettingWrite
from jobbot.services.settings_service import BotSettingsRepository

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=dict[str, Any])
async def get_settings(settings_repo: BotSettingsRepository = Depends(get_settings_repo)):
    return settings_repo.all()


@router.post("")
async def save_setting(
    req: SettingWrite, settings_repo: BotSettingsRepository = Depends(get_settings_repo)
):
    settings_repo.set(req.key, req.value)
    return {"success": True, "key": req.key}
