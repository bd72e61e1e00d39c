## Shared FastAPI dependencies; everything is injected through app.state
from fastapi import Request

from pathfinder.auth.service import AuthService
from pathfinder.session.registry import ClientContext
from pathfinder.settings import Settings
from pathfinder.storage.saved import SavedRoadmapRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth(request: Request) -> AuthService:
    return request.app.state.auth


def get_saved_repo(request: Request) -> SavedRoadmapRepository:
    return request.app.state.saved


def get_client_context(request: Request) -> ClientContext:
    return request.app.state.clients.get(request.state.client_id)
