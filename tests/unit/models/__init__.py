"""Unit tests for models."""
