"""
Pass the Pigs Configuration.

Environment variables, settings, and logging configuration.
"""

from pass_the_pigs.config.settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
