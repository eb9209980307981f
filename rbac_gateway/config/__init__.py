"""Configuration module for the RBAC gateway."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
