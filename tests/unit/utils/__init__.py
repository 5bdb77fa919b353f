"""Unit tests for utility functions."""
