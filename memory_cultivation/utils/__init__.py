"""Utility functions for memory-cultivation."""
