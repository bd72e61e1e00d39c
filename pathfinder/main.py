## Main application entry point
#
#   uvicorn pathfinder.main:create_app --factory
#
# Settings are loaded first; a missing API key stops startup with
# ConfigurationError before any route is served.
import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.llm.client import get_llm_client
from pathfinder.auth.routes import router as auth_router
from pathfinder.auth.service import AuthService
from pathfinder.chat.routes import router as chat_router
from pathfinder.errors import NotAuthenticated
from pathfinder.logging_config import configure_logging
from pathfinder.roadmaps.routes import router as roadmaps_router
from pathfinder.saved.routes import router as saved_router
from pathfinder.session.registry import CLIENT_COOKIE_NAME, ClientRegistry, new_client_id
from pathfinder.settings import Settings, get_settings
from pathfinder.storage.base import StoragePort
from pathfinder.storage.factory import build_store
from pathfinder.storage.saved import SavedRoadmapRepository
from pathfinder.templating import STATIC_DIR

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    llm: LLMClient | None = None,
    store: StoragePort | None = None,
) -> FastAPI:
    settings = (settings or get_settings()).check()
    configure_logging(settings.log_level)

    llm = llm or get_llm_client(settings)
    store = store or build_store(settings)

    app = FastAPI(title="Smart Career Pathfinder")
    app.state.settings = settings
    app.state.llm = llm
    app.state.store = store
    app.state.auth = AuthService(store, session_days=settings.session_absolute_days)
    app.state.saved = SavedRoadmapRepository(store)
    app.state.clients = ClientRegistry(llm, delay_seconds=settings.loading_delay_seconds)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.middleware("http")
    async def ensure_client_id(request: Request, call_next):
        # one UI context (roadmap page + chat) per browser
        client_id = request.cookies.get(CLIENT_COOKIE_NAME)
        is_new = not client_id
        if is_new:
            client_id = new_client_id()
        request.state.client_id = client_id

        response = await call_next(request)
        if is_new:
            response.set_cookie(
                key=CLIENT_COOKIE_NAME,
                value=client_id,
                httponly=True,
                secure=(settings.env == "prod"),
                samesite="lax",
                path="/",
            )
        return response

    @app.exception_handler(NotAuthenticated)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
        # Preserve where the user was going
        next_url = request.url.path
        if request.method != "GET":
            next_url = "/roadmap" if next_url.startswith("/roadmap") else "/"
        return RedirectResponse(url=f"/login?next={next_url}", status_code=303)

    app.include_router(auth_router)
    app.include_router(roadmaps_router)
    app.include_router(saved_router)
    app.include_router(chat_router)

    logger.info("Pathfinder ready (provider=%s, env=%s)", settings.llm_provider, settings.env)
    return app
