"""
Clause-tree construction and validation engine.

Turns an untrusted text-generator response into a verified clause tree
over a fixed token sequence.
"""

__version__ = "1.0.0"
