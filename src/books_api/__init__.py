"""Books API.

A small FastAPI service exposing book records stored in a relational table,
with request-body validation against a fixed schema.
"""

__version__ = "0.1.0"
