"""Outcome notifications for mutating operations."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from advisy.application.interfaces.services import INotifier


@contextmanager
def notify_outcome(
    notifier: INotifier,
    success: str,
    failure: str,
    *,
    messages: Mapping[type[BaseException], str] | None = None,
    **context: Any,
) -> Iterator[None]:
    """Emit exactly one notification for the wrapped block, then re-raise on failure.

    messages maps exception types to a more specific failure text; the first
    matching entry wins.
    """
    try:
        yield
    except Exception as exc:
        text = failure
        for exc_type, override in (messages or {}).items():
            if isinstance(exc, exc_type):
                text = override
                break
        notifier.error(text, error=type(exc).__name__, **context)
        raise
    notifier.success(success, **context)
