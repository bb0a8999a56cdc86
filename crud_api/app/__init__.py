"""
Application package initializer.

The project is organised into layers: ``models`` holds the plain
domain records and their validation rules, ``services`` owns the
in‑memory collections, ``schemas`` describes the JSON representation
and ``api`` translates HTTP requests into service calls.  Cross‑cutting
concerns (settings, logging, errors, middleware) live in ``core``.
"""

from .main import app, create_app  # noqa: F401
