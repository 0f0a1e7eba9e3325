"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules, organised in layers:

* ``api``           – routers (versioned under ``api/<version>/``, plus health)
* ``schemas``       – pydantic request/response models
* ``services``      – business rules
* ``repositories``  – raw SQL persistence
* ``core``          – configuration, logging, database bootstrap, errors

New versions or domains can be added without breaking existing
functionality.
"""

from .main import app  # noqa: F401
