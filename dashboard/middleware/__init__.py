"""Middleware configuration helpers."""
