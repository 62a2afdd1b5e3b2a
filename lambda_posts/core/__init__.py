"""Core package for shared application functionality.

- **config**: Settings loaded from the environment and ``.env`` files
- **context**: Correlation ID storage across async boundaries
- **exceptions**: Application errors mapped to HTTP failure envelopes
- **logging**: Loguru setup with console and JSON formatters
- **observability**: OpenTelemetry tracing setup
- **types**: Shared type aliases
"""
