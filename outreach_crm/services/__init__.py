"""Services package for the Outreach CRM API."""

from outreach_crm.services.auth_service import SupabaseAuthService, get_auth_service
from outreach_crm.services.distribution_service import (
    DistributionService,
    plan_distributions,
)

__all__ = [
    "DistributionService",
    "plan_distributions",
    "SupabaseAuthService",
    "get_auth_service",
]
