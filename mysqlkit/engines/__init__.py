"""
Engines: SQL formatting, builders, middleware and execution helpers.
"""
