"""Pydantic v2 schemas shared between the API and its clients."""

from .compare import *  # noqa: F401,F403
