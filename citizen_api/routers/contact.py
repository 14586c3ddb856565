from __future__ import annotations

from fastapi import APIRouter, Depends

from citizen_api.routers.deps import get_services
from citizen_api.schemas import ContactCreate
from citizen_api.services.registry import Services

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", status_code=201)
def create_message(body: ContactCreate, services: Services = Depends(get_services)):
    return services.contact.create_message(body.name, body.message, body.email)


@router.get("")
def list_messages(services: Services = Depends(get_services)):
    return services.contact.list_messages()
