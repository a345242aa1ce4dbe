"""Dashboard settings and savings endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from face.errors import MalformedRequestError

from .deps import DashboardDep

router = APIRouter(prefix="/api", tags=["settings"])


class SavingsPost(BaseModel):
    name: str | None = None
    value: Any = None
    date: str | None = None


@router.get("/settings")
async def get_settings(dashboard: DashboardDep):
    return dashboard.settings


@router.post("/settings")
async def update_settings(body: dict[str, Any], dashboard: DashboardDep):
    settings = dashboard.update_settings(body)
    return {"ok": True, "settings": settings}


@router.get("/savings")
async def get_savings(dashboard: DashboardDep):
    return dashboard.savings()


@router.post("/savings")
async def add_savings(body: SavingsPost, dashboard: DashboardDep):
    try:
        addition, total = dashboard.add_savings(body.name, body.value, body.date)
    except MalformedRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"ok": True, "addition": addition, "total": total}
