"""lambda-posts - a practice REST API for users and the posts they write.

The service exposes CRUD endpoints for two related resources and wraps every
answer in a ``{"success": ...}`` envelope.

Architecture Overview:
- **API Layer**: FastAPI routers, validation dependencies and middleware
- **Core Layer**: Configuration, logging, request context and exceptions
- **Infrastructure Layer**: Async SQLAlchemy models and repositories

Requests flow through cross-cutting middleware, then through a short chain
of validation dependencies (existence of the addressed entity, shape of the
request body) before a thin handler calls exactly one repository operation.
"""
