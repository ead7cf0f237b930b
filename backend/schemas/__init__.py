"""Request/response contracts for the HTTP API."""
