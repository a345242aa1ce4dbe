from fastapi import APIRouter

from .deps import DashboardDep, clamp_limit

router = APIRouter(prefix="/api/errors", tags=["errors"])

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


@router.get("")
async def get_errors(dashboard: DashboardDep, limit: int | None = None):
    return dashboard.recent_errors(clamp_limit(limit, DEFAULT_LIMIT, MAX_LIMIT))


@router.delete("/{agent_id}")
async def clear_errors(agent_id: str, dashboard: DashboardDep):
    cleared = dashboard.clear_errors(agent_id)
    return {"ok": True, "cleared": cleared}
