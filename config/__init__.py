"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    SupabaseConnection: Managed Supabase client lifecycle
"""

from config.settings import settings, get_settings, Settings
from config.database import SupabaseConnection

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "SupabaseConnection",
]
