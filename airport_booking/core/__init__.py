"""Core configuration, errors, persistence and observability."""
