"""Exception hierarchy for chainparams."""

from __future__ import annotations

from collections.abc import Iterable


class ChainParamsError(Exception):
    """
    Base exception for all chainparams errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class UnknownNetworkError(ChainParamsError, ValueError):
    """
    Raised when a network name does not belong to the supported set.

    Attributes:
        name: The name that failed to parse.
        supported: The canonical names that would have been accepted.
    """

    def __init__(self, name: str, supported: Iterable[str]) -> None:
        self.name = name
        self.supported = tuple(supported)
        super().__init__(
            f"Unknown network {name!r}. Supported networks: {', '.join(self.supported)}"
        )


class CompactTargetError(ChainParamsError, ValueError):
    """
    Raised when a compact "nBits" value does not decode to a valid target.

    Attributes:
        bits: The raw 32-bit compact value.
        reason: Either "negative" or "overflow".
    """

    def __init__(self, bits: int, reason: str) -> None:
        self.bits = bits
        self.reason = reason
        super().__init__(f"Compact target 0x{bits:08x} is invalid: {reason}")
