import os
from typing import Annotated

from fastapi import Request, Depends, Path
from fastapi.responses import ORJSONResponse, FileResponse

import config
from errors import SUCCESS, FAILED, ValidationError, NotFoundError
from models import PasteStore
from schemas import PasteIn

# ids live in a 32-bit INTEGER column
PasteId = Annotated[int, Path(ge=-2**31, le=2**31 - 1)]


def get_store(request: Request) -> PasteStore:
    """The store the app was built with (see main.create_app)."""
    return request.app.state.store


def clean_input(paste: PasteIn):
    """Normalize an incoming paste: empty title becomes None, empty body is refused."""
    title = paste.title
    if title == "":
        title = None
    if paste.body == "":
        raise ValidationError("Cannot submit an empty body.")
    return title, paste.body


def success(rows, status_code: int = 200) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content={"status": SUCCESS, "data": rows})


async def index_handler():
    return FileResponse(os.path.join(config.PUBLIC_DIR, "index.html"))


async def list_pastes_handler(store: PasteStore = Depends(get_store)):
    rows = await store.list_all()
    return success(rows)


async def list_recent_pastes_handler(store: PasteStore = Depends(get_store)):
    rows = await store.list_recent()
    return success(rows)


async def get_paste_handler(paste_id: PasteId, store: PasteStore = Depends(get_store)):
    rows = await store.get_by_id(paste_id)
    if not rows:
        raise NotFoundError(paste_id)
    return success(rows)


async def create_paste_handler(paste: PasteIn, store: PasteStore = Depends(get_store)):
    title, body = clean_input(paste)
    rows = await store.insert(title, body)
    return success(rows, status_code=201)


async def update_paste_handler(paste_id: PasteId, paste: PasteIn, store: PasteStore = Depends(get_store)):
    title, body = clean_input(paste)
    rows = await store.update(paste_id, title, body)
    if not rows:
        raise NotFoundError(paste_id)
    return success(rows)


async def delete_paste_handler(paste_id: PasteId, store: PasteStore = Depends(get_store)):
    rows = await store.delete(paste_id)
    if not rows:
        raise NotFoundError(paste_id)
    return ORJSONResponse(content={"status": SUCCESS, "message": f"Deleted paste with ID {paste_id}."})


async def health_handler(store: PasteStore = Depends(get_store)):
    try:
        await store.ping()
    except Exception as e:
        return ORJSONResponse(status_code=503, content={"status": FAILED, "message": f"database unreachable: {e.__class__.__name__}"})
    return {"status": SUCCESS, "message": "ok"}
