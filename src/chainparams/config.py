"""
Global configuration for chainparams.

Environment-driven settings for the command line tool. The registry itself
takes no configuration.
"""

import os

from chainparams.network import NetworkId

CHAINPARAMS_NETWORK = os.environ.get("CHAINPARAMS_NETWORK", NetworkId.MAINNET.value).lower()
"""The network shown when none is named on the command line. Defaults to 'bitcoin'."""

if CHAINPARAMS_NETWORK not in NetworkId.names():
    raise ValueError(
        f"Invalid CHAINPARAMS_NETWORK environment variable: '{CHAINPARAMS_NETWORK}'. "
        f"Supported values: {list(NetworkId.names())}"
    )
