"""
Database module for the employee directory backend
"""

from .connection import create_schema, get_async_session, init_database

__all__ = ["create_schema", "get_async_session", "init_database"]
