"""Notification sinks (implement INotifier)."""

from advisy.infrastructure.notifications.logging_notifier import LoggingNotifier

__all__ = ["LoggingNotifier"]
