from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import actions, health
from .config import settings
from .logging_config import LIBRARY_LOGGERS, SERVER_LOGGERS, setup_logging
from .middleware import RequestLoggingMiddleware
from .plugin import ankr_plugin

setup_logging(settings.log_level, quiet=LIBRARY_LOGGERS + SERVER_LOGGERS)

# Create FastAPI app
app = FastAPI(
    title="Ankr Plugin API",
    description=ankr_plugin.description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(actions.router, tags=["Actions"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": ankr_plugin.name,
        "version": __version__,
        "description": ankr_plugin.description,
        "actions": len(ankr_plugin.actions),
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ankr_plugin.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
