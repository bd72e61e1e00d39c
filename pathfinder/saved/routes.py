# Saved roadmap pages
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from pathfinder.agents.schemas import User
from pathfinder.auth.deps import get_current_user
from pathfinder.deps import get_client_context, get_saved_repo
from pathfinder.session.registry import ClientContext
from pathfinder.storage.saved import SavedRoadmapRepository
from pathfinder.templating import templates

router = APIRouter(prefix="/saved")


@router.get("", response_class=HTMLResponse)
def list_saved(
    request: Request,
    repo: SavedRoadmapRepository = Depends(get_saved_repo),
    user: User = Depends(get_current_user),
):
    items = sorted(repo.list_for_owner(user.id), key=lambda s: s.saved_at, reverse=True)
    return templates.TemplateResponse(
        request,
        "saved.html",
        {
            "user": user,
            "items": items,
            "deleted": request.query_params.get("deleted"),
            "error": request.query_params.get("error"),
        },
    )


@router.post("/{saved_id}/view")
async def view_saved(
    saved_id: str,
    ctx: ClientContext = Depends(get_client_context),
    repo: SavedRoadmapRepository = Depends(get_saved_repo),
    user: User = Depends(get_current_user),
):
    saved = repo.mark_viewed(saved_id, user.id)
    if not saved:
        return RedirectResponse(url="/saved?error=not_found", status_code=303)

    ctx.roadmap.show(saved.roadmap)
    return RedirectResponse(url="/roadmap", status_code=303)


@router.post("/{saved_id}/delete")
def delete_saved(
    saved_id: str,
    repo: SavedRoadmapRepository = Depends(get_saved_repo),
    user: User = Depends(get_current_user),
):
    if not repo.delete(saved_id, user.id):
        return RedirectResponse(url="/saved?error=not_found", status_code=303)
    return RedirectResponse(url="/saved?deleted=1", status_code=303)
