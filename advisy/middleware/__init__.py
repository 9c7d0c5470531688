"""HTTP middleware. Applied in advisy.main; last added = outermost."""

from advisy.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
