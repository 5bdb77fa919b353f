"""Behave steps and environment hooks for REST API scenarios."""
