"""Reusable type definitions for consensus parameter records."""

from .base import CamelModel, StrictBaseModel
from .uint import BaseUint, Uint32, Uint64, Uint256

__all__ = [
    "BaseUint",
    "CamelModel",
    "StrictBaseModel",
    "Uint32",
    "Uint64",
    "Uint256",
]
