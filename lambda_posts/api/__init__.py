"""HTTP API layer built on FastAPI.

Key components:
- **main**: Application factory and lifecycle management
- **validation**: Existence and shape validators resolved as dependencies
- **routers**: ``users`` and ``posts`` resource routes
- **middleware**: Correlation IDs, request logging, exception handlers
- **schemas**: Request bodies, entity payloads and response envelopes
- **utils**: orjson response class and envelope helpers
"""
