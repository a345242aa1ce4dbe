from fastapi import APIRouter

from .deps import DashboardDep

router = APIRouter(prefix="/api/uptime", tags=["uptime"])


@router.get("")
async def get_uptime(dashboard: DashboardDep):
    return dashboard.uptime_document()


@router.get("/{agent_id}")
async def get_agent_uptime(agent_id: str, dashboard: DashboardDep):
    return dashboard.agent_uptime(agent_id)
