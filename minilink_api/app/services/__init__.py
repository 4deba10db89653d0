"""
Service layer abstraction.

Each service encapsulates business logic for a domain and raises the
errors defined in ``core.errors``.  API handlers stay thin: they
authenticate the caller, call a service and shape the response.
"""
