"""
HealthCare+ Portal

A FastAPI-based patient/doctor appointment portal fronting a hosted
backend-as-a-service for identity, profile data and file storage.
"""

__version__ = "1.0.0"
