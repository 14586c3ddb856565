"""Read-only aggregate reports."""
from __future__ import annotations

from citizen_api.db.store import CitizenStore
from citizen_api.repositories.sql_repository import SQLRepository


class ReportService:
    def __init__(self, store: CitizenStore) -> None:
        self.repository = SQLRepository(store)

    def benefit_distribution(self) -> list[dict]:
        """
        Application counts per department, largest first, ties by name.
        Schemes without a department fall into "Uncategorized"; departments
        whose schemes have no applications are listed with a count of 0.
        """
        return self.repository.benefit_distribution()
