# app/main.py

"""Viblog Backend - personal blog API with posts, comments and notifications."""

from fastapi import APIRouter, Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from app.configs import settings
from app.errors import (
    DatabaseError,
    ForbiddenError,
    PasswordHashingError,
    RateLimitExceededError,
    UserAuthenticationError,
    ValidationError,
    auth_exception_handler,
    create_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    rate_limit_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from app.managers.rate_limiter import api_rate_limit
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import get_logger
from app.routes import (
    admin_router,
    auth_router,
    comments_router,
    notifications_router,
    posts_router,
    taxonomy_router,
)
from app.schemas import HealthResponse
from app.utils.helpers import utc_now

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Viblog Backend API",
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)
configure_cors(app)


api_router = APIRouter(prefix="/api/v1", dependencies=[Depends(api_rate_limit)])

routes = [
    auth_router,
    posts_router,
    taxonomy_router,
    comments_router,
    notifications_router,
    admin_router,
]

_ = [api_router.include_router(router) for router in routes]
app.include_router(api_router)

errors = [
    (UserAuthenticationError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (ValidationError, validation_error_handler),
    (RateLimitExceededError, rate_limit_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, create_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "env": "development",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01T00:00:00Z",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Not rate limited and needs no authentication.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "env": "development", "version": "1.0.0", "timestamp": "..."}
    """
    return HealthResponse(
        status="ok",
        env=settings.SERVER_ENV,
        version=app.version,
        timestamp=utc_now(),
    )


if __name__ == "__main__":
    from uvicorn import run

    run(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
