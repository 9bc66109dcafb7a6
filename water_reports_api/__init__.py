"""
Top‑level package for the Water Reports API.

This file makes ``water_reports_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``water_reports_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
