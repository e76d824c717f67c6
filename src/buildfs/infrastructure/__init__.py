"""Logging and configuration shared by the filesystem operations."""
