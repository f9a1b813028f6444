"""Network identifiers."""

from __future__ import annotations

from enum import Enum

from chainparams.exceptions import UnknownNetworkError


class ChainFamily(Enum):
    """Independent chains whose networks share a proof-of-work limit lineage."""

    BITCOIN = "bitcoin"
    DOGECOIN = "dogecoin"


class NetworkId(Enum):
    """
    The closed set of networks with built-in consensus parameters.

    Adding a network means adding a member here and a branch in the registry.

    Attributes:
        value (str): The canonical lowercase name of the network.
        family (ChainFamily): The chain the network belongs to.
        is_test_network (bool): Whether the network is a test or regression variant.
    """

    def __init__(self, value: str, family: ChainFamily, is_test_network: bool):
        self._value_ = value
        self.family = family
        self.is_test_network = is_test_network

    MAINNET = ("bitcoin", ChainFamily.BITCOIN, False)
    """The Bitcoin main network."""

    TESTNET = ("testnet", ChainFamily.BITCOIN, True)
    """The Bitcoin public test network."""

    REGTEST = ("regtest", ChainFamily.BITCOIN, True)
    """
    The Bitcoin regression-test network.

    Used for local, deterministic testing: difficulty is minimal and never
    retargets.
    """

    ALT_MAINNET = ("dogecoin", ChainFamily.DOGECOIN, False)
    """The Dogecoin main network."""

    ALT_TESTNET = ("dogetest", ChainFamily.DOGECOIN, True)
    """The Dogecoin test network."""

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Canonical names of every network, in declaration order."""
        return tuple(network.value for network in cls)

    @classmethod
    def from_name(cls, name: str) -> NetworkId:
        """
        Parse a canonical network name, ignoring case and surrounding whitespace.

        Raises:
            UnknownNetworkError: If the name is not one of `names()`.
        """
        wanted = name.strip().lower()
        for network in cls:
            if network.value == wanted:
                return network
        raise UnknownNetworkError(name, cls.names())

    def __str__(self) -> str:
        return self.value
