"""
Authentication module: credential store, role registry, registration and login.
"""
