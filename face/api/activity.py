from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from face.errors import MalformedRequestError

from .deps import DashboardDep, clamp_limit

router = APIRouter(prefix="/api/activity", tags=["activity"])

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class ActivityPost(BaseModel):
    type: str | None = None
    agent: str | None = None
    text: str | None = None
    icon: str | None = None


@router.get("")
async def get_activity(dashboard: DashboardDep, limit: int | None = None):
    return dashboard.recent_activity(clamp_limit(limit, DEFAULT_LIMIT, MAX_LIMIT))


@router.post("", status_code=201)
async def add_activity(body: ActivityPost, dashboard: DashboardDep):
    try:
        event = dashboard.add_activity(body.type, body.agent, body.text, body.icon)
    except MalformedRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return event.to_dict()
