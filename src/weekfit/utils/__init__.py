"""Utility functions for weekfit."""
