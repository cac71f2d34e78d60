"""
Interface definitions for clause-tree services.

Protocols for dependency injection and easy test fakes.
"""

from .generation_interface import ITextGenerator, IDiagnosticSink

__all__ = [
    "ITextGenerator",
    "IDiagnosticSink",
]
