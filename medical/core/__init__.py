"""
Shared infrastructure: security, schemas, middleware and profile updates.
"""
