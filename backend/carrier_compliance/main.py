"""
Carrier Compliance
FastAPI application entry point

Preflight service for DHL Express bookings:
- POST /shipments/validate: compliance check
- POST /shipments/payload: MyDHL booking payload
- GET /health
"""
import logging

from fastapi import FastAPI

from carrier_compliance.core.config import settings
from carrier_compliance.routers import shipments

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
)

app.include_router(shipments.router)

logger.info(f"{settings.APP_NAME} started (environment={settings.ENVIRONMENT})")


@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "ok", "service": settings.APP_NAME}
