"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- security: SecurityManager for tokens and password hashing
- dependencies: FastAPI dependency injection functions

Usage:
------
    from app.core import AppException, get_current_member

    from app.core import exceptions
    raise exceptions.item_not_found(item_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .security import SecurityManager, get_security_manager, strip_bearer_prefix
from .dependencies import (
    AuthenticationManager,
    get_current_member,
    get_page_request,
)

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
    # Security
    "SecurityManager",
    "get_security_manager",
    "strip_bearer_prefix",
    # Dependencies
    "AuthenticationManager",
    "get_current_member",
    "get_page_request",
]
