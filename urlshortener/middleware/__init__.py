from urlshortener.middleware.logging import LoggingMiddleware
from urlshortener.middleware.metrics import MetricsMiddleware

__all__ = ["LoggingMiddleware", "MetricsMiddleware"]
