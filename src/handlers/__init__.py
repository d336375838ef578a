"""HTTP API route handlers."""
