"""
HTTP surface for englitune.

Wraps the validation pipeline and the sampling query in a FastAPI app with
CORS, a favicon short-circuit and JSON error envelopes.
"""

from englitune.api.app import create_app, get_row_store

__all__ = ["create_app", "get_row_store"]
