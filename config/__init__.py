"""Configuration package."""
from .settings import Settings, settings
from .client_config import ClientConfig, ConfigStatus, ValidationReport

__all__ = [
    'Settings',
    'settings',
    'ClientConfig',
    'ConfigStatus',
    'ValidationReport',
]
