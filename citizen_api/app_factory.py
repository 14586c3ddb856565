"""Entry point for ASGI servers (``uvicorn citizen_api.app_factory:app``)."""
from citizen_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
