"""
Endpoint modules.

Each module defines an ``APIRouter`` for a specific domain.  The
routers are aggregated in ``api/router.py``.
"""
