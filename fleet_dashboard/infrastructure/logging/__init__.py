"""Logging helpers for the fleet dashboard."""
