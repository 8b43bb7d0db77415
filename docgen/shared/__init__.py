"""Shared primitives: errors, logging, request context."""
