"""
Medical appointments backend.

Provides:
- Patient and doctor registration with atomic profile creation
- Login and signed bearer tokens
- Role-based access to profile endpoints
- Appointments and direct messages between users
"""
__version__ = "1.0.0"
