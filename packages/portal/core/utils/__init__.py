"""Shared utilities for the Portal client."""
