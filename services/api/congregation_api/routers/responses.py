"""
Error payloads shared by the routers and the app-level exception handlers.
"""
from fastapi import HTTPException, status


def error_detail(code: str, message: str) -> dict:
    return {"code": code, "message": message}


def not_found(entity: str, identity) -> HTTPException:
    """404 for a get-by-id miss."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_detail("NOT_FOUND", f"{entity} {identity} not found"),
    )
