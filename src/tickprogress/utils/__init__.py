"""Formatting and configuration utilities."""
