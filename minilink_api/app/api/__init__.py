"""
API package.

``router`` aggregates the endpoint modules in ``endpoints``; each of
those defines an ``APIRouter`` for one domain (auth, profile, posts).
"""
