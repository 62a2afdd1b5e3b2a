"""Type aliases for dynamic data structures throughout the application."""

from typing import Any

# Context dictionary for logging additional information
# Values must be JSON-serializable for structured logging
type LogContext = dict[str, Any]
