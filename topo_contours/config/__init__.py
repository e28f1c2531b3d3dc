"""
Configuration for the height-field engine.
"""

from .config import Settings, settings

__all__ = ['Settings', 'settings']
