"""
Alumni Tracking API
REST backend for alumni profiles and their employment history.

Architecture:
- MongoDB: alumni, employment records, users, file metadata
- Local disk: uploaded photos and certificates
- JWT: stateless auth with admin / user roles
"""

__version__ = "1.0.0"
