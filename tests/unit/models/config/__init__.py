"""Unit tests for configuration models."""
