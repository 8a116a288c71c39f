"""
Test suite for the HealthCare+ Portal.

Contains unit and integration tests for the portal's flows.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
