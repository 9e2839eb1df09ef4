"""Pydantic schemas for API responses."""

from .common import *  # noqa: F403
from .health import *  # noqa: F403
from .status import *  # noqa: F403
