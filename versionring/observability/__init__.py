"""Observability helpers for versionring.

Submodules:
    logging -- structlog configuration and component-bound loggers.
"""
