"""API routers for the Carbon Tracker service."""
