"""Logging and environment helpers."""
