"""Centralized error transformation for API routes.

Maps solrbridge errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from solrbridge.domain.shared.error import (
    DomainError,
    InfrastructureError,
    NotFoundError,
    SolrBridgeError,
    UnknownIndexError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    UnknownIndexError: 404,
    ValidationError: 422,
}


def map_error(error: SolrBridgeError) -> HTTPException:
    """Map a solrbridge error to an HTTPException.

    Args:
        error: The error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Solr or database unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, UnknownIndexError):
            detail["available"] = error.available
        return HTTPException(status_code=status_code, detail=detail)

    return HTTPException(status_code=500, detail=detail)
