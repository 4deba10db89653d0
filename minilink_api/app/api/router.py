"""
Top‑level API router.

Aggregates the domain routers under their prefixes.  The whole router
is mounted under ``/api`` by ``main.create_app``.
"""

from fastapi import APIRouter

from .endpoints import auth, posts, profile


router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(posts.router, prefix="/post", tags=["posts"])
