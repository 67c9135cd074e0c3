"""
Core utilities shared across the storage layer.

This package hosts:
- configuration helpers (env vars)
- logging setup
- web-safe key tokens and the instructor composite key
- the registration key generator
"""
