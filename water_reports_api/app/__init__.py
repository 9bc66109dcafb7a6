"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (reports, users) has a schema module, a
service class and a router defined in ``api/endpoints``.
"""

from .main import app  # noqa: F401
