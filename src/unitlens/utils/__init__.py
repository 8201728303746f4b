"""Utility helpers for unitlens."""
