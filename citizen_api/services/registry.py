"""Bundle of services sharing one store, stored on ``app.state.services``."""
from __future__ import annotations

from dataclasses import dataclass

from citizen_api.db.store import CitizenStore
from citizen_api.services.application_service import ApplicationService
from citizen_api.services.contact_service import ContactService
from citizen_api.services.dev_service import DevService
from citizen_api.services.grievance_service import GrievanceService
from citizen_api.services.report_service import ReportService
from citizen_api.services.scheme_service import SchemeService
from citizen_api.services.user_service import UserService


@dataclass
class Services:
    store: CitizenStore
    schemes: SchemeService
    applications: ApplicationService
    grievances: GrievanceService
    contact: ContactService
    reports: ReportService
    users: UserService
    dev: DevService


def build_services(store: CitizenStore) -> Services:
    return Services(
        store=store,
        schemes=SchemeService(store),
        applications=ApplicationService(store),
        grievances=GrievanceService(store),
        contact=ContactService(store),
        reports=ReportService(store),
        users=UserService(store),
        dev=DevService(store),
    )
