"""
FastAPI routers grouped by domain (schemes, applications, grievances, ...).

Each module exposes an APIRouter included by ``citizen_api.app`` under
``/api``. Endpoints only translate requests into service calls.
"""
