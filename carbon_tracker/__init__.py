"""
Carbon Tracker - authentication, onboarding and submissions API for the
carbon footprint dashboard.
"""

__version__ = "0.1.0"
