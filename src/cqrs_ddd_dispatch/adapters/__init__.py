"""Adapters for the ports."""
