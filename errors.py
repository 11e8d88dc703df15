import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

logger = logging.getLogger(__name__)

SUCCESS = "Success"
FAILED = "Failed"


class PasteError(Exception):
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(PasteError):
    """The request can't be served as sent (empty body, malformed id)."""

    status_code = 400


class NotFoundError(PasteError):
    status_code = 404

    def __init__(self, paste_id: int):
        self.paste_id = paste_id
        super().__init__(f"There is no paste with ID {paste_id}.")


def failure(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content={"status": FAILED, "data": [], "message": message},
    )


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # loc is (source, field, ...), e.g. ("path", "paste_id")
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        if err.get("type") == "json_invalid":
            field = "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "Invalid request. " + "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Render client errors in the Failed envelope. Everything else is left alone."""

    @app.exception_handler(PasteError)
    async def paste_error_handler(request: Request, exc: PasteError) -> ORJSONResponse:
        logger.debug("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return failure(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
        return failure(400, _describe(exc))
