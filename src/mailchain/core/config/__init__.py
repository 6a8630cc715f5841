"""
Configuration Management Package

Provides Pydantic-based configuration models and management for MailChain.
"""

from mailchain.core.config.models import AppConfig, InputConfig, OutputConfig, StageConfig
from mailchain.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "InputConfig",
    "OutputConfig",
    "StageConfig",
    "ConfigManager",
]
