import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.auth import router as auth_router
from app.api.security import register_middleware
from app.api.users import router as users_router
from app.auth import TokenService
from app.config import DEFAULT_JWT_SECRET, settings
from app.database import init_db
from app.errors import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("USERAUTH_JWT_SECRET is not set; using the insecure default")
    init_db()
    logger.info(f"{settings.app_name} ready on port {settings.port}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.token_service = TokenService(
        secret_key=settings.jwt_secret,
        expire_minutes=settings.jwt_expire_minutes,
    )

    register_middleware(app)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)

    @app.get("/")
    async def root():
        return {"status": "ok", "service": settings.app_name}

    @app.get("/actuator/health")
    async def health():
        return {"status": "UP"}

    return app


app = create_app()
