import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from errors import register_error_handlers
from logging_setup import configure_logging, RequestLoggingMiddleware
from models import PasteStore
from schemas import Envelope
from handlers import (
    index_handler, list_pastes_handler, list_recent_pastes_handler, get_paste_handler,
    create_paste_handler, update_paste_handler, delete_paste_handler, health_handler,
)

logger = logging.getLogger(__name__)

_failed = {"model": Envelope, "description": "status is Failed, message says why"}


def create_app(store: PasteStore = None) -> FastAPI:
    """Build the app around ``store``; a store for DATABASE_URL is made when none is given."""
    store = store or PasteStore(config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup: a database we can't reach means we don't serve
        await store.connect()
        yield
        # shutdown
        await store.disconnect()

    app = FastAPI(title="Pastebin", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # /pastes/recent must be registered ahead of /pastes/{paste_id}
    app.get("/", include_in_schema=False)(index_handler)
    app.get("/health")(health_handler)
    app.get("/pastes", responses={200: {"model": Envelope}})(list_pastes_handler)
    app.get("/pastes/recent", responses={200: {"model": Envelope}})(list_recent_pastes_handler)
    app.get("/pastes/{paste_id}", responses={200: {"model": Envelope}, 404: _failed})(get_paste_handler)
    app.post("/pastes", status_code=201, responses={201: {"model": Envelope}, 400: _failed})(create_paste_handler)
    app.put("/pastes/{paste_id}", responses={200: {"model": Envelope}, 400: _failed, 404: _failed})(update_paste_handler)
    app.delete("/pastes/{paste_id}", responses={200: {"model": Envelope}, 404: _failed})(delete_paste_handler)
    return app


def run():
    """Console entry point: serve on $PORT."""
    import uvicorn

    if not config.PORT:
        raise SystemExit("Missing PORT environment variable. Set it in .env file.")
    logger.info("Starting server on port %s", config.PORT)
    uvicorn.run(app, host=config.HOST, port=int(config.PORT), log_config=None)


# uvicorn main:app
configure_logging(config.LOG_LEVEL)
app = create_app()


if __name__ == "__main__":
    run()
