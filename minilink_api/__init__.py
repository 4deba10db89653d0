"""
Top‑level package for the MiniLink API.

All functionality lives in submodules under ``app``; the command line
tool lives in ``cli``.
"""

__all__ = []
