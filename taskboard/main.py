import logging

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Settings
from .database import TaskStore, create_db_engine
from .errors import AppError, app_error_handler
from .rendering import TaskRenderer
from .routers import tasks

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the application.

    Connects to the database, creates the schema and parses the page
    template up front; any failure here is raised to the caller.
    """
    renderer = TaskRenderer(settings.templates_dir)
    store = TaskStore(create_db_engine(settings.database_url))
    try:
        store.create_tables()
    except AppError:
        store.close()
        raise

    app = FastAPI(
        title="Taskboard",
        description="HTMX task list backed by a single SQL table",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.renderer = renderer

    app.add_exception_handler(AppError, app_error_handler)
    app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
    app.include_router(tasks.router, tags=["tasks"])

    @app.get("/", response_class=HTMLResponse)
    def index():
        """Page shell; the task list is fetched by the client afterwards."""
        return HTMLResponse(renderer.render_shell())

    # Release pooled connections on shutdown
    @app.on_event("shutdown")
    def on_shutdown():
        logger.info("closing database engine")
        app.state.store.close()

    return app
