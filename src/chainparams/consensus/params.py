"""
Consensus Parameters

Defines the per-network constants that govern block validation and
proof-of-work difficulty retargeting, and the registry that hands them out.

Every value here is consensus-critical. A single wrong constant changes which
blocks a node accepts and forks it off the network.
"""

from __future__ import annotations

from pydantic import model_validator
from typing_extensions import Final, assert_never

from chainparams.network import NetworkId
from chainparams.types import StrictBaseModel, Uint32, Uint64, Uint256

# --- Proof-of-Work Limits ---
#
# Words are listed least-significant first.

MAX_BITS_BITCOIN: Final = Uint256.from_words(
    [
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0x00000000FFFFFFFF,
    ]
)
"""Lowest possible difficulty for Bitcoin mainnet."""

MAX_BITS_TESTNET: Final = Uint256.from_words(
    [
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0x00000000FFFFFFFF,
    ]
)
"""Lowest possible difficulty for Bitcoin testnet."""

MAX_BITS_REGTEST: Final = Uint256.from_words(
    [
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0x7FFFFFFFFFFFFFFF,
    ]
)
"""Lowest possible difficulty for Bitcoin regtest."""

MAX_BITS_DOGECOIN: Final = Uint256.from_words(
    [
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0x00000FFFFFFFFFFF,
    ]
)
"""Lowest possible difficulty for Dogecoin mainnet."""

MAX_BITS_DOGETEST: Final = Uint256.from_words(
    [
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0xFFFFFFFFFFFFFFFF,
        0x00000FFFFFFFFFFF,
    ]
)
"""Lowest possible difficulty for Dogecoin testnet."""

# --- Shared Constants ---

BIP16_TIME: Final = Uint32(1333238400)
"""April 1st 2012, when P2SH (BIP16) became enforced on every built-in network."""

BITCOIN_POW_TARGET_SPACING: Final = Uint64(10 * 60)
"""10 minutes."""

BITCOIN_POW_TARGET_TIMESPAN: Final = Uint64(14 * 24 * 60 * 60)
"""2 weeks."""

DOGECOIN_POW_TARGET_SPACING: Final = Uint64(60)
"""1 minute."""

DOGECOIN_POW_TARGET_TIMESPAN: Final = Uint64(4 * 60 * 60)
"""4 hours, the pre-Digishield retarget period."""


class ConsensusParams(StrictBaseModel):
    """
    Parameters that influence chain consensus on one network.

    Records are frozen. Two records built for the same network compare equal.
    """

    network: NetworkId
    """Network for which the parameters are valid."""

    legacy_feature_activation_time: Uint32
    """Unix time at which BIP16 (pay-to-script-hash) becomes active."""

    height_activation_a: Uint32
    """Block height at which BIP34 (height in coinbase) becomes active."""

    height_activation_b: Uint32
    """Block height at which BIP65 (OP_CHECKLOCKTIMEVERIFY) becomes active."""

    height_activation_c: Uint32
    """Block height at which BIP66 (strict DER signatures) becomes active."""

    rule_change_activation_threshold: Uint32
    """
    Minimum number of signalling blocks in a confirmation window for a
    BIP9 deployment to lock in.

    Examples: 1916 of 2016 for 95%, 1512 of 2016 for test chains.
    """

    miner_confirmation_window: Uint32
    """Number of blocks in one BIP9 signalling window."""

    pow_limit: Uint256
    """Proof-of-work limit: the largest target, i.e. the lowest possible difficulty."""

    pow_target_spacing: Uint64
    """Expected number of seconds to mine one block."""

    pow_target_timespan: Uint64
    """Number of seconds in one difficulty recalculation period."""

    allow_min_difficulty_blocks: bool
    """Whether blocks may fall back to the minimum difficulty after a stall."""

    no_pow_retargeting: bool
    """Whether difficulty retargeting is disabled on this network."""

    @model_validator(mode="after")
    def validate_activation_threshold(self) -> ConsensusParams:
        """A deployment cannot need more signalling blocks than the window holds."""
        if self.rule_change_activation_threshold > self.miner_confirmation_window:
            raise ValueError(
                f"rule_change_activation_threshold ({self.rule_change_activation_threshold}) "
                f"exceeds miner_confirmation_window ({self.miner_confirmation_window})"
            )
        return self

    @property
    def pow_limit_bits(self) -> Uint32:
        """The proof-of-work limit in compact "nBits" form."""
        return self.pow_limit.to_compact()

    def difficulty_adjustment_interval(self) -> Uint64:
        """
        Calculate the number of blocks between difficulty adjustments.

        This is `pow_target_timespan // pow_target_spacing`. A zero spacing
        raises `ZeroDivisionError`; no built-in network has one.
        """
        return self.pow_target_timespan // self.pow_target_spacing


def difficulty_adjustment_interval(params: ConsensusParams) -> Uint64:
    """Calculate the number of blocks between difficulty adjustments for `params`."""
    return params.difficulty_adjustment_interval()


def lookup(network: NetworkId) -> ConsensusParams:
    """
    Create the consensus parameters for the given network.

    A fresh record is built on every call.
    """
    match network:
        case NetworkId.MAINNET:
            return ConsensusParams(
                network=NetworkId.MAINNET,
                legacy_feature_activation_time=BIP16_TIME,
                # 000000000000024b89b42a942fe0d9fea3bb44ab7bd1b19115dd6a759c0808b8
                height_activation_a=Uint32(227931),
                # 000000000000000004c2b624ed5d7756c508d90fd0da2c7c679febfa6c4735f0
                height_activation_b=Uint32(388381),
                # 00000000000000000379eaa19dce8c9b722d46ae6a57c2f1a988119488b50931
                height_activation_c=Uint32(363725),
                rule_change_activation_threshold=Uint32(1916),  # 95%
                miner_confirmation_window=Uint32(2016),
                pow_limit=MAX_BITS_BITCOIN,
                pow_target_spacing=BITCOIN_POW_TARGET_SPACING,
                pow_target_timespan=BITCOIN_POW_TARGET_TIMESPAN,
                allow_min_difficulty_blocks=False,
                no_pow_retargeting=False,
            )
        case NetworkId.TESTNET:
            return ConsensusParams(
                network=NetworkId.TESTNET,
                legacy_feature_activation_time=BIP16_TIME,
                # 0000000023b3a96d3484e5abb3755c413e7d41500f8e2a5c3f0dd01299cd8ef8
                height_activation_a=Uint32(21111),
                # 00000000007f6655f22f98e72ed80d8b06dc761d5da09df0fa1dc4be4f861eb6
                height_activation_b=Uint32(581885),
                # 000000002104c8c45e99a8853285a3b592602a3ccde2b832481da85e9e4ba182
                height_activation_c=Uint32(330776),
                rule_change_activation_threshold=Uint32(1512),  # 75%
                miner_confirmation_window=Uint32(2016),
                pow_limit=MAX_BITS_TESTNET,
                pow_target_spacing=BITCOIN_POW_TARGET_SPACING,
                pow_target_timespan=BITCOIN_POW_TARGET_TIMESPAN,
                allow_min_difficulty_blocks=True,
                no_pow_retargeting=False,
            )
        case NetworkId.REGTEST:
            return ConsensusParams(
                network=NetworkId.REGTEST,
                legacy_feature_activation_time=BIP16_TIME,
                height_activation_a=Uint32(100000000),  # not activated on regtest
                height_activation_b=Uint32(1351),
                height_activation_c=Uint32(1251),  # used only in rpc tests
                rule_change_activation_threshold=Uint32(108),  # 75%
                miner_confirmation_window=Uint32(144),
                pow_limit=MAX_BITS_REGTEST,
                pow_target_spacing=BITCOIN_POW_TARGET_SPACING,
                # The interval derived from this is never used: regtest does not retarget.
                pow_target_timespan=BITCOIN_POW_TARGET_TIMESPAN,
                allow_min_difficulty_blocks=True,
                no_pow_retargeting=True,
            )
        case NetworkId.ALT_MAINNET:
            return ConsensusParams(
                network=NetworkId.ALT_MAINNET,
                legacy_feature_activation_time=BIP16_TIME,
                # 80d1364201e5df97e696c03bdd24dc885e8617b9de51e453c10a4f629b1e797a
                height_activation_a=Uint32(1034383),
                # 34cd2cbba4ba366f47e5aa0db5f02c19eba2adf679ceb6653ac003bdc9a0ef1f
                height_activation_b=Uint32(3464751),
                # 80d1364201e5df97e696c03bdd24dc885e8617b9de51e453c10a4f629b1e797a
                height_activation_c=Uint32(1034383),
                rule_change_activation_threshold=Uint32(9576),  # 95%
                miner_confirmation_window=Uint32(10080),
                pow_limit=MAX_BITS_DOGECOIN,
                pow_target_spacing=DOGECOIN_POW_TARGET_SPACING,
                pow_target_timespan=DOGECOIN_POW_TARGET_TIMESPAN,
                allow_min_difficulty_blocks=False,
                no_pow_retargeting=False,
            )
        case NetworkId.ALT_TESTNET:
            return ConsensusParams(
                network=NetworkId.ALT_TESTNET,
                legacy_feature_activation_time=BIP16_TIME,
                # 21b8b97dcdb94caa67c7f8f6dbf22e61e0cfe0e46e1fff3528b22864659e9b38
                height_activation_a=Uint32(708658),
                # 955bd496d23790aba1ecfacb722b089a6ae7ddabaedf7d8fb0878f48308a71f9
                height_activation_b=Uint32(1854705),
                # 21b8b97dcdb94caa67c7f8f6dbf22e61e0cfe0e46e1fff3528b22864659e9b38
                height_activation_c=Uint32(708658),
                rule_change_activation_threshold=Uint32(2880),
                miner_confirmation_window=Uint32(10080),
                pow_limit=MAX_BITS_DOGETEST,
                pow_target_spacing=DOGECOIN_POW_TARGET_SPACING,
                pow_target_timespan=DOGECOIN_POW_TARGET_TIMESPAN,
                allow_min_difficulty_blocks=True,
                no_pow_retargeting=False,
            )
        case _:
            assert_never(network)


def lookup_by_name(name: str) -> ConsensusParams:
    """
    Create the consensus parameters for a network given by its canonical name.

    Raises:
        UnknownNetworkError: If the name is not a supported network.
    """
    return lookup(NetworkId.from_name(name))


def all_params() -> list[ConsensusParams]:
    """Create the consensus parameters for every network, in declaration order."""
    return [lookup(network) for network in NetworkId]
