"""
Persistence adapters.

Callers depend on these repositories instead of building SQLAlchemy
statements themselves.
"""
