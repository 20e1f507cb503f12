# expense_tracker/main.py

from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from expense_tracker.api.entries import router as entries_router
from expense_tracker.config import Settings, get_settings
from expense_tracker.db.store import EntryStore
from expense_tracker.errors import register_error_handlers
from expense_tracker.log import configure_logging

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit Settings object.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Expense Tracker API",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.store = EntryStore(settings.data_path)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(entries_router)
    register_error_handlers(app)

    # Mounted last: API routes take precedence over files under /.
    app.mount(
        "/",
        StaticFiles(directory=settings.static_dir, html=True),
        name="static",
    )
    return app


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    application = create_app(settings)

    logger.info(
        "server_starting",
        url=f"http://localhost:{settings.port}",
        data_path=str(settings.data_path),
    )
    uvicorn.run(application, host=settings.host, port=settings.port, log_config=None)


app = create_app()
