"""
Patient profiles.
"""
