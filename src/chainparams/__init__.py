"""Consensus parameters for Bitcoin and Dogecoin networks."""

from .consensus import ConsensusParams, difficulty_adjustment_interval, lookup
from .network import ChainFamily, NetworkId

__all__ = [
    "ChainFamily",
    "ConsensusParams",
    "NetworkId",
    "difficulty_adjustment_interval",
    "lookup",
]
