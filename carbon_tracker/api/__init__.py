"""HTTP layer of the Carbon Tracker service."""
