"""
Routers for the clause-tree API.
"""

from .health import router as health_router
from .syntax import router as syntax_router

__all__ = ["health_router", "syntax_router"]
