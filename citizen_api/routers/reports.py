from fastapi import APIRouter, Depends

from citizen_api.routers.deps import get_services
from citizen_api.services.registry import Services

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/benefit-distribution")
def benefit_distribution(services: Services = Depends(get_services)):
    return services.reports.benefit_distribution()
