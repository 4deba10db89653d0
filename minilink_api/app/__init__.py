"""
Application package initializer.

The API is organised by concern: ``core`` holds configuration,
database access and security, ``schemas`` the request/response
models, ``services`` the business logic and ``api`` the HTTP routes.
"""

from .main import app  # noqa: F401
