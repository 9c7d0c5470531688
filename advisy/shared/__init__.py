"""Shared utilities: cache key builders, generators, datetime helpers."""
