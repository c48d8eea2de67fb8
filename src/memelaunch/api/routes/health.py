"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter

from memelaunch.api.dependencies import LaunchpadDep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: SettingsDep, launchpad: LaunchpadDep) -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        dict with status, version and launchpad counters.
    """
    records = launchpad.manager.records()
    return {
        "status": "ok",
        "version": settings.app_version,
        "coins": len(records),
        "finalized": sum(1 for record in records if record.finalized),
    }
