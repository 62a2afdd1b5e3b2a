"""Middleware and exception handlers for cross-cutting request concerns.

- **RequestContextMiddleware**: Correlation IDs for every request
- **RequestLoggingMiddleware**: Request start/completion logs with timing
- **error_handler**: Maps exceptions to failure envelopes
"""
