"""
Application package initializer.

The service is split into a handful of small pieces: ``core`` holds
configuration, logging, the error taxonomy and the JSON document
store; ``services`` holds the product repository; ``schemas`` the
Pydantic payload models; and ``api`` the HTTP router mounted under
``/api/products``.
"""

from .main import app  # noqa: F401
