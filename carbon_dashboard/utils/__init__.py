"""Utility helpers for the carbon dashboard."""
