import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from login_service.adapter.services.password_hasher import BcryptPasswordHasher
from login_service.adapter.services.reset_notifier import LoggingResetNotifier
from login_service.app.services.credential_store import CredentialStore
from login_service.depends import build_credential_store
from login_service.domain import messages
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": messages.INTERNAL_ERROR}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    error_dict = {"code": "VALIDATION_ERROR", "message": messages.INVALID_REQUEST}
    # Only field locations; the rejected input may contain a password
    locations = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
    logger.warning(f"Request validation failed: {locations}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: CredentialStore = app.state.credential_store
    await store.init()
    try:
        yield
    finally:
        await store.close()


def create_app(ApplicationConfig, store: Optional[CredentialStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The credential store is created here (or passed in), opened by the
    lifespan on startup and closed on shutdown. Callers that pass their own
    store and do not run the lifespan must init/close it themselves.
    """
    app = FastAPI(title="Login Service", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.credential_store = store or build_credential_store(ApplicationConfig)
    app.state.password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
    app.state.reset_notifier = LoggingResetNotifier()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from login_service.api.routes import auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
