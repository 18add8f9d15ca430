"""Shared utilities for tzstamp."""
