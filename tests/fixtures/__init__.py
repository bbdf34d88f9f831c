"""Shared pytest fixtures and helpers for the Books API tests."""

from .books import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
