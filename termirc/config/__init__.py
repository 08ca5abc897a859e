"""Configuration package: pydantic model and file loader."""

from .loader import ConfigLoader  # noqa: F401
from .model import ClientConfig  # noqa: F401

__all__ = ["ClientConfig", "ConfigLoader"]
