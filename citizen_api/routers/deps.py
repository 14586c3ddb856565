from __future__ import annotations

from fastapi import Request

from citizen_api.core.errors import UninitializedError
from citizen_api.services.registry import Services


def get_services(request: Request) -> Services:
    services = getattr(getattr(request.app, "state", None), "services", None)
    if services is None:
        raise UninitializedError("Database not initialized")
    return services
