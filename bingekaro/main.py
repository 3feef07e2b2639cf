"""BingeKaro API: shareable movie, series and anime recommendation lists."""
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from bingekaro.app_state import APP_VERSION, AppState, get_app_state
from bingekaro.auth.router import router as auth_router
from bingekaro.database import Base, engine
from bingekaro.errors import AppError, app_error_handler
from bingekaro.favorites.router import router as favorites_router
from bingekaro.lists.router import router as lists_router
from bingekaro.rate_limit import limiter
from bingekaro.search.router import router as search_router
from bingekaro.settings import settings
from bingekaro.users.router import router as users_router
from bingekaro.users.storage import UPLOAD_URL_PREFIX

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

v1_router = APIRouter(prefix="/api/v1")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create shared clients at startup and close them on shutdown."""
    if settings.auto_create_tables:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)

    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    app_state = AppState.create(settings)
    app.state.app_state = app_state

    if not app_state.omdb.configured:
        logger.warning("OMDB_API_KEY is not set; media search will be unavailable")

    logger.info("Startup complete")

    yield

    await app_state.close()
    logger.info("Shutting down")


app = FastAPI(
    title="BingeKaro API",
    version=APP_VERSION,
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Authorization", "X-Requested-With"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log request method, path, status, and duration."""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    # Path only: private-list passwords travel in the query string
    if request.url.path not in ["/health", "/"]:
        logger.info(f"{request.method} {request.url.path} | Status: {response.status_code} | Duration: {duration:.3f}s")

    return response


@app.get("/")
def root(app_state: AppState = Depends(get_app_state)):
    """Root endpoint mirrors the health check."""
    return health(app_state)


@app.get("/health")
def health(app_state: AppState = Depends(get_app_state)):
    """Health check endpoint for monitoring."""
    return app_state.get_health_status()


v1_router.include_router(auth_router)
v1_router.include_router(users_router)
v1_router.include_router(favorites_router)
v1_router.include_router(lists_router)
v1_router.include_router(search_router)
app.include_router(v1_router)

app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=str(settings.upload_dir), check_dir=False), name="uploads")


if __name__ == "__main__":
    uvicorn.run("bingekaro.main:app", host="0.0.0.0", port=8000, reload=True)
