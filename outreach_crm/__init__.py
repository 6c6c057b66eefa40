"""Outreach CRM API: companies, engagements, activities, files, tags and resources."""

__version__ = "0.1.0"
