"""
Todo Service - per-user todo lists behind bearer-token authentication
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import timedelta
import logging

from .auth import TokenIssuer
from .config import settings
from .db import init_db
from .errors import register_error_handlers
from .identity import register_identity_middleware
from .routes import auth, todos, health
from .utils.event_logger import configure_event_log_file

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
configure_event_log_file()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Per-user todo lists with bearer-token authentication",
    version="1.0.0",
    lifespan=lifespan
)

# Built once at import; a missing secret stops the process here
app.state.token_issuer = TokenIssuer(
    settings.JWT_SECRET,
    ttl=timedelta(hours=settings.JWT_EXPIRE_HOURS),
    algorithm=settings.JWT_ALGORITHM
)

# Wrapped by CORS; preflight requests never need a token
register_identity_middleware(app, prefix=todos.router.prefix)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(todos.router)
app.include_router(health.router)


def run() -> None:
    import uvicorn

    logger.info("Server running on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
