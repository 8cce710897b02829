"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from punchlines import __version__
from punchlines.api.routes import (auth, health, jokes, metrics, pages,
                                   suggest)
from punchlines.core.config import get_settings
from punchlines.core.errors import PunchlineError
from punchlines.core.logging_config import LoggingConfig
from punchlines.core.middleware import LoggingContextMiddleware
from punchlines.core.middleware_metrics import MetricsMiddleware

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="AI comedy writing partner: generate punchlines and save favorites",
    version=__version__,
    lifespan=lifespan,
)

# Added last runs first: logging context wraps metrics
app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PunchlineError)
async def punchline_error_handler(request: Request, exc: PunchlineError):
    """Render service errors as the error envelope"""
    logger.info(
        f"Request rejected: {exc.reason}",
        extra={"error_type": type(exc).__name__, "status_code": exc.status_code}
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled errors and answer with a generic error envelope"""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(status_code=500, content={"status": "error", "reason": "Unknown"})


app.include_router(pages.router)
app.include_router(auth.router)
app.include_router(suggest.router)
app.include_router(jokes.router)
app.include_router(health.router)
app.include_router(metrics.router)
