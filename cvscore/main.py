import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import sentry_sdk

from cvscore.api.v1.analysis import router as analysis_router
from cvscore.api.v1.health import router as health_router
from cvscore.core.config import settings
from cvscore.core.cors import cors_allow_credentials, cors_allow_origin_regex, cors_allowed_origins
from cvscore.core.lifespan import lifespan
from cvscore.core.rate_limit import limiter
from cvscore.engine import ValidationError
from cvscore.schemas.analysis import ErrorEnvelope
from dotenv import load_dotenv

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorEnvelope(error=message).model_dump())


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(exc.status_code, str(exc))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return _error_response(400, "Invalid request body")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request body")
    logger.info("request_rejected path=%s field=%s reason=%s", request.url.path, location or "-", message)
    return _error_response(400, f"{location}: {message}" if location else message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.info("rate_limited path=%s limit=%s", request.url.path, exc.detail)
    response = _error_response(429, f"Rate limit exceeded: {exc.detail}")
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


app = FastAPI(title="CV Score API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
app.add_exception_handler(ValidationError, _validation_error_handler)
app.add_exception_handler(RequestValidationError, _request_validation_handler)
app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(analysis_router, prefix="/v1", tags=["Analysis"])
