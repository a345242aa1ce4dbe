from typing import Annotated

from fastapi import Depends, Request

from face.core import Dashboard


async def get_dashboard(request: Request) -> Dashboard:
    return request.app.state.dashboard


DashboardDep = Annotated[Dashboard, Depends(get_dashboard)]


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    if not limit or limit < 0:
        return default
    return min(limit, maximum)
