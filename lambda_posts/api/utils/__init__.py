"""Utility modules for the API layer.

- **responses**: orjson response class and failure envelope helpers
"""
