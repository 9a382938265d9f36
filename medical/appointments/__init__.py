"""
Appointments between patients and doctors.
"""
