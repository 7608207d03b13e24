"""Deployment configuration for the health monitor."""

from .dotenv_loader import DotenvLoader
from .errors import ConfigurationError
from .runtime import PROJECT_ROOT, Configuration, DatabaseSettings, load_configuration

__all__ = [
    "Configuration",
    "ConfigurationError",
    "DatabaseSettings",
    "DotenvLoader",
    "PROJECT_ROOT",
    "load_configuration",
]
