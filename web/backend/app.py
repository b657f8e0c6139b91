#!/usr/bin/env python3
"""
ScholarMatch API - FastAPI Application

Student recommendations and sponsor applicant ranking, AI-assisted with a
rule-based fallback.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    recommendations_router,
    rankings_router,
    cache_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="ScholarMatch API",
    description="API for scholarship recommendations and applicant ranking",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(recommendations_router)
app.include_router(rankings_router)
app.include_router(cache_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "scholarmatch-api"}


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting ScholarMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
