"""Persistence implementations for auth_core.

This package contains database-specific implementations of the
repository interfaces defined in auth_core.repositories.

Structure:
    persistence/
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation
"""
