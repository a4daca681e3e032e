"""FastAPI application serving JSON-LD recipe extraction."""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from jsonld_recipe.config import Settings, get_settings
from jsonld_recipe.models import ExtractionError
from jsonld_recipe.parser.pipeline import parse_recipe

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="JSON-LD Recipe Extractor")


def _error_response(error_type: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"error": error_type, "message": message}, status_code=status_code
    )


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError):
    logger.warning(
        "%s [%s] for %s: %s",
        type(exc).__name__,
        exc.error_type,
        request.query_params.get("url"),
        exc.message,
    )
    return _error_response(exc.error_type, exc.message, 400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error for %s", request.url)
    return _error_response("internal", "Internal Server Error", 500)


class NoStoreHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(NoStoreHeadersMiddleware)


@app.get("/")
async def recipe(url: str = "", settings: Settings = Depends(get_settings)):
    if not url.strip():
        return _error_response("validation", "Missing url parameter.", 400)

    result = await parse_recipe(url.strip(), settings)
    logger.info("Served recipe %r from %s", result.name, url)
    return JSONResponse(result.to_mapping())
