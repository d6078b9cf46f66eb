"""Attendance Gateway package.

Feature modules (devices, attendance, shifts, webhooks, health, docs) sit on top
of a thin Flask controller layer; the service layer never touches Flask.
"""

__version__ = "2.0.0"
