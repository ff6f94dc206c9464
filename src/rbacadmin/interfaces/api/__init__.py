"""Falcon ASGI interface."""
