"""
High-level use cases for the citizen services API.

Each service owns the business rules for one area (schemes, applications,
grievances, contact, reports) and works against the ``CitizenStore`` it is
given. Routers call these services instead of touching the store directly.
"""
