"""Configuration management package for the beat grid converter"""

from .manager import ConfigManager, ConfigurationError

__all__ = ['ConfigManager', 'ConfigurationError']
