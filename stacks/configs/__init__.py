"""Configuration models for the container web application stack."""

from .domain_config import DomainConfig
from .settings import WebAppSettings, get_settings, reset_settings, update_settings

__all__ = [
    "DomainConfig",
    "WebAppSettings",
    "get_settings",
    "reset_settings",
    "update_settings",
]
