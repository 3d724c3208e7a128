"""Command-line interface for the CRM core."""
