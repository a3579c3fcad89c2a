"""
Carbon Dashboard - Streamlit analytics for carbon footprint submissions.

This package renders a signed-in user's submission history from the
carbon tracker API as summary statistics and charts.
"""

__version__ = "0.1.0"
