"""Shared helpers for uploads, logging and error handling."""
