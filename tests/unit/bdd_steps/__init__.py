"""Unit tests for behave steps and hooks."""
