"""Routers package for API endpoints.

Every router in this package requires an authenticated caller.
"""

from outreach_crm.routers import (
    activities,
    companies,
    dashboard,
    engagements,
    files,
    resources,
    tags,
)

__all__ = [
    "activities",
    "companies",
    "dashboard",
    "engagements",
    "files",
    "resources",
    "tags",
]
