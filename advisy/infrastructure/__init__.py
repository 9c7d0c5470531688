"""Infrastructure layer: persistence, cache, notifications, security."""
