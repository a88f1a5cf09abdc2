"""Utility modules for mediainfoutils (configuration and logging)."""
