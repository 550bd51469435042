"""
HeroHub API - FastAPI Application
Hero engagement ledger, activity feed, leaderboards and peer connections
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from herohub import __version__
from herohub.core.config import settings
from herohub.core.database import get_engine, init_db
from herohub.core.exceptions import HeroHubError, InconsistencyError
from herohub.utils.responses import error_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Hero engagement ledger and aggregation API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


@app.exception_handler(HeroHubError)
async def domain_exception_handler(request: Request, exc: HeroHubError):
    if isinstance(exc, InconsistencyError):
        logger.error(
            f"Inconsistent write on {request.method} {request.url.path}: "
            f"action={exc.action} actor={exc.actor_id} target={exc.target} "
            f"step={exc.step} rolled_back={exc.rolled_back}"
        )
    return error_response(exc.message, detail=exc.detail, status_code=exc.status_code)


# Global Exception Handler so unexpected errors still get the error envelope
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("Internal Server Error", detail=str(exc), status_code=500)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "environment": settings.APP_ENV
    }


@app.get("/health/db", tags=["Health"])
async def db_health_check():
    """Database connection health check"""
    result = {"connection_test": False, "error": None}
    
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
            result["connection_test"] = True
    except Exception as e:
        result["error"] = str(e)
    
    return result


# Import routers
from herohub.api import users, heroes, connections  # noqa: E402

# Include routers
app.include_router(users.router, prefix="/api/v1", tags=["Users"])
app.include_router(heroes.router, prefix="/api/v1", tags=["Heroes"])
app.include_router(connections.router, prefix="/api/v1", tags=["Connections"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "herohub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
