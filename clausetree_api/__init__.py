"""
HTTP API for the clause-tree engine.
"""
