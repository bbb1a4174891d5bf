"""Shared page chrome, widgets and session helpers."""
