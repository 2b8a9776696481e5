from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from branding_picker import __version__
from branding_picker.api.v1 import router as v1_router
from branding_picker.config import config
from branding_picker.schemas import HealthResponse
from branding_picker.utils.logging import logger

app = FastAPI(
    title="Branding Picker",
    description="Derive AppStream branding colors from application icons",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Branding Picker API",
        "version": __version__,
        "docs": "/docs"
    }


logger.info("Branding Picker API initialised", extra={"version": __version__})
