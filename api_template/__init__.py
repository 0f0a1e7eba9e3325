"""
Top‑level package for the API template.

This file makes ``api_template`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``api_template.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
