# Essential imports
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from routers import admin, auth, chirps, users, webhooks
from contextlib import asynccontextmanager

from core.database import init_db

# Rate limiter imports
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from middleware.rate_limiter import limiter

# Logging and error handling imports
from core.logging_config import setup_logging
from core.errors import register_exception_handlers
from middleware import RequestContextMiddleware
from core.config import settings
from utils.logger import get_logger

# CORS imports
from fastapi.middleware.cors import CORSMiddleware

# Initialize logging
setup_logging(
    log_level=settings.LOG_LEVEL,
    log_dir=settings.LOG_DIR
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Application startup complete", extra={"event": "startup", "platform": settings.PLATFORM})
    yield
    logger.info("Application shutting down", extra={"event": "shutdown"})


app = FastAPI(
    title="Chirpy API",
    description="Users, chirps and refresh-token sessions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Applies default_limits to routes without their own @limiter.limit
app.add_middleware(SlowAPIMiddleware)

# Request ID + per-response logging
app.add_middleware(RequestContextMiddleware)


# Readiness probe
@app.get("/api/healthz", response_class=PlainTextResponse)
@limiter.exempt
def readiness():
    logger.debug("Health check requested")
    return "ok"


register_exception_handlers(app)


# Including routers
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(chirps.router)
app.include_router(webhooks.router)
app.include_router(admin.router)


# Add rate limiter to the app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
