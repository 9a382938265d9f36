"""
Direct messages between users.
"""
