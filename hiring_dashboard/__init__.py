"""Hiring dashboard: applicant tracking API over a company-scoped pipeline store."""
