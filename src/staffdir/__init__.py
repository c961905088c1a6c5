"""
Employee directory backend
GraphQL API for employee records with signup, login and photo uploads
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
