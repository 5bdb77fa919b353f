"""Utility functions used by the step library."""
