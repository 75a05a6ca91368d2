from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import assistant, auth, branding, estimates, materials, measurements, pdf, permits, projects

logger = logging.getLogger("roofmaster")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="RoofMaster 360",
    description="Roofing cost estimation API for contractors",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api")
app.include_router(branding.router, prefix="/api")
app.include_router(materials.router, prefix="/api")
app.include_router(estimates.router, prefix="/api")
app.include_router(projects.router, prefix="/api")
app.include_router(pdf.router, prefix="/api")
app.include_router(measurements.router, prefix="/api")
app.include_router(permits.router, prefix="/api")
app.include_router(assistant.router, prefix="/api")


@app.get("/api/config/status")
def config_status():
    """Which optional integrations have keys. Never returns the keys themselves."""
    google = bool(settings.google_api_key)
    return {
        "googleMapsConfigured": google,
        "googleSolarConfigured": google,
        "shovelsConfigured": bool(settings.SHOVELS_API_KEY),
        "openaiConfigured": bool(settings.OPENAI_API_KEY),
    }


@app.get("/health")
def health():
    return {"status": "ok", "app": "roofmaster"}


@app.on_event("startup")
def log_startup():
    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set; auth endpoints will return 500")
    logger.info("RoofMaster API started (database: %s)", settings.DATABASE_URL.split("://", 1)[0])
