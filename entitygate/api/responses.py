"""Shared response helpers for API endpoints.

Error bodies follow the application-wide structure
{"error": str, "code": str, "request_id": str}. Entity alert headers
announce the outcome of a mutation to clients:

    X-<app>-alert:  <app>.<entity>.created | updated | deleted
    X-<app>-error:  error.<reason>
    X-<app>-params: entity id (or entity name for errors)
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from entitygate.core.config import get_settings


def get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    """Build a structured JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "code": code,
            "request_id": get_request_id(request),
            **extra,
        },
        headers=headers,
    )


def entity_alert_headers(entity: str, action: str, param: Any) -> dict[str, str]:
    """Headers announcing a successful create/update/delete."""
    app_name = get_settings().client_app_name
    return {
        f"X-{app_name}-alert": f"{app_name}.{entity}.{action}",
        f"X-{app_name}-params": str(param),
    }


def failure_alert_headers(entity: str, reason: str) -> dict[str, str]:
    """Headers announcing a rejected request."""
    app_name = get_settings().client_app_name
    return {
        f"X-{app_name}-error": f"error.{reason}",
        f"X-{app_name}-params": entity,
    }
