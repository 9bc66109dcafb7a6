"""
Top‑level API router.

This router aggregates the domain routers under their prefixes.  The
application mounts it under ``/api``, giving ``/api/reports`` and
``/api/users``.
"""

from fastapi import APIRouter

from .endpoints import reports, users

router = APIRouter()

router.include_router(reports.router, prefix="/reports", tags=["reports"])
router.include_router(users.router, prefix="/users", tags=["users"])
