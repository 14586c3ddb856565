from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from citizen_api.routers.deps import get_services
from citizen_api.schemas import FeedbackCreate, GrievanceCreate, GrievanceUpdate
from citizen_api.services.registry import Services

router = APIRouter(prefix="/grievances", tags=["grievances"])


@router.post("", status_code=201)
def create_grievance(body: GrievanceCreate, services: Services = Depends(get_services)):
    return services.grievances.create_grievance(
        body.subject,
        body.description,
        user_id=body.userId,
        user=body.user.to_new_user() if body.user else None,
    )


@router.get("")
def list_grievances(services: Services = Depends(get_services)):
    return services.grievances.list_grievances()


@router.patch("/{grievance_id}")
def update_grievance(grievance_id: int, body: GrievanceUpdate, services: Services = Depends(get_services)):
    return services.grievances.update_status(grievance_id, body.status)


@router.delete("/{grievance_id}", status_code=204)
def delete_grievance(grievance_id: int, services: Services = Depends(get_services)):
    services.grievances.delete_grievance(grievance_id)
    return Response(status_code=204)


@router.post("/{grievance_id}/feedback", status_code=201)
def add_feedback(grievance_id: int, body: FeedbackCreate, services: Services = Depends(get_services)):
    return services.grievances.add_feedback(grievance_id, body.rating, body.comments)


@router.get("/{grievance_id}/feedback")
def list_feedback(grievance_id: int, services: Services = Depends(get_services)):
    return services.grievances.list_feedback(grievance_id)
