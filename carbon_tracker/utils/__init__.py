"""Utility helpers for the carbon tracker service."""
