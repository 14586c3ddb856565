from __future__ import annotations

from fastapi import APIRouter, Depends

from citizen_api.routers.deps import get_services
from citizen_api.schemas import ApplicationCreate, ApplicationUpdate
from citizen_api.services.registry import Services

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", status_code=201)
def create_application(body: ApplicationCreate, services: Services = Depends(get_services)):
    return services.applications.create_application(
        body.schemeId,
        body.data,
        user_id=body.userId,
        user=body.user.to_new_user() if body.user else None,
    )


@router.get("/track/{tracking_id}")
def track_application(tracking_id: str, services: Services = Depends(get_services)):
    return services.applications.get_by_tracking_id(tracking_id)


@router.get("")
def list_applications(services: Services = Depends(get_services)):
    return services.applications.list_applications()


@router.patch("/{application_id}")
def update_application(application_id: int, body: ApplicationUpdate, services: Services = Depends(get_services)):
    return services.applications.update_status(application_id, body.status)
