"""
Inspira Content Backend

A FastAPI backend for the Kustom Inspira website.
Provides the content gateway over the hosted database and the page loads
built on it.
"""

__version__ = "1.0.0"
