"""Demo data endpoints; only mounted when APP_ENV is not production."""
from fastapi import APIRouter, Depends

from citizen_api.routers.deps import get_services
from citizen_api.services.registry import Services

router = APIRouter(prefix="/dev", tags=["dev"])


@router.post("/seed-applications")
def seed_applications(services: Services = Depends(get_services)):
    return services.dev.seed_applications()


@router.post("/delete-john-doe")
def delete_john_doe(services: Services = Depends(get_services)):
    return services.dev.delete_john_doe()
