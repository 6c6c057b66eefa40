"""Core configuration and shared helpers for the Outreach CRM API."""
