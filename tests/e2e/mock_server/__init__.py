"""Mock REST API server used by integration and end to end tests."""
