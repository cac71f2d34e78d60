"""
Middleware package for the clause-tree API.
"""

from .security import setup_security, SecurityHeadersMiddleware, RequestLoggingMiddleware

__all__ = ["setup_security", "SecurityHeadersMiddleware", "RequestLoggingMiddleware"]
