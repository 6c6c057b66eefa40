from outreach_crm.db.models.company import CompanyORM
from outreach_crm.db.models.engagement import EngagementORM, FollowUpActionORM
from outreach_crm.db.models.activity import AdditionalActivityORM
from outreach_crm.db.models.file import FileORM
from outreach_crm.db.models.tag import CompanyTagORM, TagORM
from outreach_crm.db.models.resource import ResourceDistributionORM, ResourceORM

__all__ = [
    "AdditionalActivityORM",
    "CompanyORM",
    "CompanyTagORM",
    "EngagementORM",
    "FileORM",
    "FollowUpActionORM",
    "ResourceDistributionORM",
    "ResourceORM",
    "TagORM",
]
