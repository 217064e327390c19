"""ASGI middleware."""

from custom_domains.middleware.request_id import RequestIDMiddleware, request_id_var

__all__ = ["RequestIDMiddleware", "request_id_var"]
