"""Shared helpers: config, logging, errors, auth, validation."""
