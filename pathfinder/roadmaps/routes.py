# Role selection + roadmap pages
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from pathfinder.agents.schemas import User
from pathfinder.auth.deps import get_current_user, get_optional_user
from pathfinder.constants import CAREER_PATH_NAMES
from pathfinder.deps import get_client_context, get_saved_repo
from pathfinder.session.controller import RoadmapStatus
from pathfinder.session.registry import ClientContext
from pathfinder.storage.saved import SavedRoadmapRepository
from pathfinder.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    ctx: ClientContext = Depends(get_client_context),
    user: Optional[User] = Depends(get_optional_user),
):
    return templates.TemplateResponse(
        request,
        "home.html",
        {"user": user, "view": ctx.roadmap.view(), "error": request.query_params.get("error")},
    )


@router.post("/roadmap")
async def select_role(role: str = Form(...), ctx: ClientContext = Depends(get_client_context)):
    role = role.strip()
    if role not in CAREER_PATH_NAMES:
        return RedirectResponse(url="/?error=unknown_role", status_code=303)

    # a second submission while one is in flight is ignored
    ctx.roadmap.start(role)
    return RedirectResponse(url="/roadmap", status_code=303)


@router.get("/roadmap", response_class=HTMLResponse)
async def roadmap_page(
    request: Request,
    ctx: ClientContext = Depends(get_client_context),
    user: Optional[User] = Depends(get_optional_user),
):
    view = ctx.roadmap.view()
    if view.status is RoadmapStatus.IDLE:
        return RedirectResponse(url="/", status_code=303)

    return templates.TemplateResponse(
        request,
        "roadmap.html",
        {
            "user": user,
            "view": view,
            "saved": request.query_params.get("saved"),
            "error": request.query_params.get("error"),
        },
    )


@router.get("/roadmap/state")
async def roadmap_state(ctx: ClientContext = Depends(get_client_context)):
    return JSONResponse(ctx.roadmap.view().to_json_dict())


@router.post("/roadmap/retry")
async def retry(ctx: ClientContext = Depends(get_client_context)):
    if not ctx.roadmap.start_retry():
        return RedirectResponse(url="/", status_code=303)
    return RedirectResponse(url="/roadmap", status_code=303)


@router.post("/reset")
async def start_over(ctx: ClientContext = Depends(get_client_context)):
    ctx.roadmap.reset()
    return RedirectResponse(url="/", status_code=303)


@router.post("/roadmap/save")
async def save_roadmap(
    ctx: ClientContext = Depends(get_client_context),
    repo: SavedRoadmapRepository = Depends(get_saved_repo),
    user: User = Depends(get_current_user),
):
    roadmap = ctx.roadmap.roadmap
    if ctx.roadmap.status is not RoadmapStatus.DISPLAYED or roadmap is None:
        return RedirectResponse(url="/roadmap?error=nothing_to_save", status_code=303)

    repo.save(user.id, roadmap)
    return RedirectResponse(url="/roadmap?saved=1", status_code=303)
