from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from citizen_api.routers.deps import get_services
from citizen_api.schemas import SchemeCreate, SchemeUpdate
from citizen_api.services.registry import Services

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("")
def list_schemes(services: Services = Depends(get_services)):
    return services.schemes.list_schemes()


@router.post("", status_code=201)
def create_scheme(body: SchemeCreate, services: Services = Depends(get_services)):
    return services.schemes.create_scheme(body.title, body.description, body.department)


@router.get("/{scheme_id}")
def get_scheme(scheme_id: int, services: Services = Depends(get_services)):
    return services.schemes.get_scheme(scheme_id)


@router.put("/{scheme_id}")
def update_scheme(scheme_id: int, body: SchemeUpdate, services: Services = Depends(get_services)):
    return services.schemes.update_scheme(
        scheme_id,
        title=body.title,
        description=body.description,
        department=body.department,
    )


@router.delete("/{scheme_id}", status_code=204)
def delete_scheme(scheme_id: int, services: Services = Depends(get_services)):
    services.schemes.delete_scheme(scheme_id)
    return Response(status_code=204)
