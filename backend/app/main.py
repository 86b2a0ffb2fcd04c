import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import settings
from app.core.error_handlers import register_exception_handlers
from app.core.middleware import apply_cors
from app.routes import health_router, v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    The engine client is created lazily on first request, so startup only
    reports configuration that would make every engine call fail.
    """
    logger.info("=== Furniture Search Starting ===")

    if not settings.supabase_url or not settings.supabase_service_role_key:
        logger.warning("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set; engine calls will fail")
    if not settings.cognito_user_pool_id:
        logger.warning("COGNITO_USER_POOL_ID not set; internal routes will reject every token")

    logger.info("=== Furniture Search Ready ===")

    yield

    logger.info("=== Furniture Search Shutting Down ===")


app = FastAPI(title="Furniture Search API", lifespan=lifespan)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s:%(name)s:%(message)s",
)

apply_cors(app)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(v1_router)
