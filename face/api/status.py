"""Agent config and status endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from face.errors import UnknownAgentError

from .deps import DashboardDep

router = APIRouter(prefix="/api", tags=["status"])


class StatusReport(BaseModel):
    status: str | None = None
    task: str | None = None
    detail: str | None = None
    progress: float | None = Field(default=None, ge=0, le=100)
    error: str | None = None


@router.get("/config")
async def get_config(dashboard: DashboardDep):
    return dashboard.config


@router.get("/status")
async def get_status(dashboard: DashboardDep):
    return dashboard.status_document()


@router.get("/status/{agent_id}")
async def get_agent_status(agent_id: str, dashboard: DashboardDep):
    try:
        return dashboard.get_status(agent_id).to_dict()
    except UnknownAgentError as e:
        raise HTTPException(status_code=404, detail="Agent not found") from e


@router.post("/status/{agent_id}")
async def report_status(agent_id: str, body: StatusReport, dashboard: DashboardDep):
    try:
        record = dashboard.report_status(
            agent_id,
            status=body.status,
            task=body.task,
            detail=body.detail,
            progress=body.progress,
            error=body.error,
        )
    except UnknownAgentError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"ok": True, "agent": record.to_dict()}


@router.post("/status")
async def batch_update(body: dict[str, StatusReport], dashboard: DashboardDep):
    updates = {agent_id: patch.model_dump(exclude_unset=True) for agent_id, patch in body.items()}
    updated = dashboard.batch_update(updates)
    return {"ok": True, "updated": updated}
