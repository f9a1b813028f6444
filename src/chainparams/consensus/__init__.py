"""Consensus parameter registry."""

from .params import (
    MAX_BITS_BITCOIN,
    MAX_BITS_DOGECOIN,
    MAX_BITS_DOGETEST,
    MAX_BITS_REGTEST,
    MAX_BITS_TESTNET,
    ConsensusParams,
    all_params,
    difficulty_adjustment_interval,
    lookup,
    lookup_by_name,
)

__all__ = [
    "ConsensusParams",
    "MAX_BITS_BITCOIN",
    "MAX_BITS_DOGECOIN",
    "MAX_BITS_DOGETEST",
    "MAX_BITS_REGTEST",
    "MAX_BITS_TESTNET",
    "all_params",
    "difficulty_adjustment_interval",
    "lookup",
    "lookup_by_name",
]
