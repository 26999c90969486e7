"""
Configuration package for the HR workflow service.

This package contains the environment settings and the logging setup.
"""

from app.config.settings import Settings, StorageSettings, TokenSettings, get_settings, settings

__all__ = ['settings', 'get_settings', 'Settings', 'TokenSettings', 'StorageSettings']
