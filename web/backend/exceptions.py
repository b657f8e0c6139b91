#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class AssessmentNotFoundException(ServiceException):
    """Raised when a student has not submitted an assessment."""
    pass


class ScholarshipNotFoundException(ServiceException):
    """Raised when a scholarship is not found."""
    pass


class NoScholarshipsAvailableException(ServiceException):
    """Raised when no open scholarship has remaining slots."""
    pass


class NotScholarshipOwnerException(ServiceException):
    """Raised when a sponsor acts on a scholarship they do not own."""
    pass


def status_code_for(exc: ServiceException) -> int:
    if isinstance(exc, (AssessmentNotFoundException, ScholarshipNotFoundException)):
        return 404
    if isinstance(exc, NoScholarshipsAvailableException):
        return 400
    if isinstance(exc, NotScholarshipOwnerException):
        return 403
    return 500


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
