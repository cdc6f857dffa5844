"""Shared pytest fixtures for catalog tests."""

from .core import *  # noqa: F401,F403
