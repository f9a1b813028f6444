"""Unsigned Integer Type Tests."""

from typing import Any, Type

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError, create_model

from chainparams.exceptions import CompactTargetError
from chainparams.types.uint import BaseUint, Uint32, Uint64, Uint256

ALL_UINT_TYPES = (Uint32, Uint64, Uint256)
"""A collection of all Uint types to test against."""


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_pydantic_validation_accepts_valid_int(uint_class: Type[BaseUint]) -> None:
    """Pydantic validation builds an instance of the Uint type from an int."""
    model = create_model("Model", value=(uint_class, ...))

    instance: Any = model(value=10)
    assert isinstance(instance.value, uint_class)
    assert instance.value == uint_class(10)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
@pytest.mark.parametrize("invalid_value", [1.0, "1", True, False, -1])
def test_pydantic_validation_rejects_invalid_values(
    uint_class: Type[BaseUint], invalid_value: Any
) -> None:
    """Values that are not non-negative ints never validate, even outside strict mode."""
    model = create_model("Model", value=(uint_class, ...))

    with pytest.raises(ValidationError):
        model(value=invalid_value)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_pydantic_json_validation(uint_class: Type[BaseUint]) -> None:
    """JSON input is range checked and produces the Uint type."""
    model = create_model("Model", value=(uint_class, ...))

    instance: Any = model.model_validate_json('{"value": 7}')
    assert isinstance(instance.value, uint_class)
    assert instance.value == uint_class(7)

    with pytest.raises(ValidationError):
        model.model_validate_json(f'{{"value": {2**uint_class.BITS}}}')


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_pydantic_serializes_to_plain_int(uint_class: Type[BaseUint]) -> None:
    """Dumping a model yields plain ints."""
    model = create_model("Model", value=(uint_class, ...))

    dumped = model(value=uint_class(3)).model_dump()
    assert type(dumped["value"]) is int
    assert dumped["value"] == 3


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
@pytest.mark.parametrize(
    "invalid_value, expected_type_name",
    [
        (1.0, "float"),
        ("1", "str"),
        (True, "bool"),
        (b"1", "bytes"),
        (None, "NoneType"),
    ],
)
def test_instantiation_from_invalid_types_raises_error(
    uint_class: Type[BaseUint], invalid_value: Any, expected_type_name: str
) -> None:
    """Instantiating with non-integer types raises a TypeError."""
    with pytest.raises(TypeError, match=f"Expected int, got {expected_type_name}"):
        uint_class(invalid_value)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_instantiation_out_of_range(uint_class: Type[BaseUint]) -> None:
    """Negative and too-large values raise OverflowError."""
    with pytest.raises(OverflowError):
        uint_class(-1)
    with pytest.raises(OverflowError):
        uint_class(2**uint_class.BITS)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_max_value(uint_class: Type[BaseUint]) -> None:
    """The max_value() class method returns the largest representable value."""
    assert uint_class.max_value() == 2**uint_class.BITS - 1
    assert isinstance(uint_class(uint_class.max_value()), uint_class)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_arithmetic_operators(uint_class: Type[BaseUint]) -> None:
    """Arithmetic stays within the type and checks the range."""
    a = uint_class(100)
    b = uint_class(3)
    max_val = uint_class(uint_class.max_value())

    assert a + b == uint_class(103)
    assert a - b == uint_class(97)
    assert a * b == uint_class(300)
    assert a // b == uint_class(33)
    assert a % b == uint_class(1)
    assert isinstance(a // b, uint_class)

    with pytest.raises(OverflowError):
        _ = max_val + b
    with pytest.raises(OverflowError):
        _ = b - a


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_floor_division_by_zero(uint_class: Type[BaseUint]) -> None:
    """Dividing by zero surfaces ZeroDivisionError unchanged."""
    with pytest.raises(ZeroDivisionError):
        _ = uint_class(10) // uint_class(0)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_mixed_operands_raise_error(uint_class: Type[BaseUint]) -> None:
    """Operators reject plain ints on either side."""
    with pytest.raises(TypeError):
        _ = uint_class(3) + 100
    with pytest.raises(TypeError):
        _ = 100 + uint_class(3)
    with pytest.raises(TypeError):
        _ = 100 - uint_class(3)
    with pytest.raises(TypeError):
        _ = 100 // uint_class(3)
    with pytest.raises(TypeError):
        _ = uint_class(10) == 10
    with pytest.raises(TypeError):
        _ = 10 != uint_class(10)
    with pytest.raises(TypeError):
        _ = 5 < uint_class(10)


def test_mixed_widths_raise_error() -> None:
    """Values of different widths do not combine."""
    with pytest.raises(TypeError):
        _ = Uint32(1) + Uint64(1)
    with pytest.raises(TypeError):
        _ = Uint64(1) == Uint256(1)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_comparison_with_same_type(uint_class: Type[BaseUint]) -> None:
    """All comparison operators work between two instances of the same type."""
    assert uint_class(5) < uint_class(10)
    assert uint_class(5) <= uint_class(10)
    assert uint_class(10) == uint_class(10)
    assert uint_class(10) != uint_class(5)
    assert uint_class(10) > uint_class(5)
    assert uint_class(10) >= uint_class(5)


@pytest.mark.parametrize("uint_class", ALL_UINT_TYPES)
def test_repr_str_and_hash(uint_class: Type[BaseUint]) -> None:
    """Representations show the type and the hash differs from a raw int."""
    value = uint_class(42)
    assert str(value) == "42"
    assert repr(value) == f"{uint_class.__name__}(42)"
    assert hash(uint_class(1)) == hash(uint_class(1))
    assert hash(uint_class(1)) != hash(1)


def test_to_bytes() -> None:
    """to_bytes defaults to the natural width, little-endian."""
    assert Uint32(258).to_bytes() == b"\x02\x01\x00\x00"
    assert Uint32(258).to_bytes(byteorder="big") == b"\x00\x00\x01\x02"
    assert len(Uint256(1).to_bytes()) == 32


class TestUint256Words:
    """Tests for the four-word view of Uint256."""

    def test_from_words_is_least_significant_first(self) -> None:
        """The first word holds the lowest 64 bits."""
        value = Uint256.from_words([1, 2, 3, 4])
        assert value == Uint256(1 | (2 << 64) | (3 << 128) | (4 << 192))

    def test_words_property(self) -> None:
        """The words property splits a value back into four Uint64 words."""
        value = Uint256((0xAA << 192) | 0xBB)
        assert value.words == (Uint64(0xBB), Uint64(0), Uint64(0), Uint64(0xAA))
        assert all(isinstance(word, Uint64) for word in value.words)

    @pytest.mark.parametrize("words", [[], [1, 2, 3], [1, 2, 3, 4, 5]])
    def test_wrong_word_count(self, words: list[int]) -> None:
        """Exactly four words are required."""
        with pytest.raises(ValueError, match="exactly 4 words"):
            Uint256.from_words(words)

    def test_word_out_of_range(self) -> None:
        """Each word must fit in 64 bits."""
        with pytest.raises(OverflowError):
            Uint256.from_words([2**64, 0, 0, 0])
        with pytest.raises(OverflowError):
            Uint256.from_words([0, 0, 0, -1])

    @given(st.integers(min_value=0, max_value=2**256 - 1))
    def test_words_round_trip(self, raw: int) -> None:
        """Splitting into words and joining them again is lossless."""
        value = Uint256(raw)
        assert Uint256.from_words(value.words) == value


class TestUint256Compact:
    """Tests for the compact "nBits" encoding."""

    @pytest.mark.parametrize(
        "raw, bits",
        [
            (0, 0x00000000),
            (0x12, 0x01120000),
            (0x80, 0x02008000),
            (0x1234, 0x02123400),
            (0x123456, 0x03123456),
            (0x12345678, 0x04123456),
            (0xFFFF << 208, 0x1D00FFFF),
        ],
    )
    def test_to_compact(self, raw: int, bits: int) -> None:
        """Known values encode to their well-known compact forms."""
        assert Uint256(raw).to_compact() == Uint32(bits)

    def test_from_compact_genesis_bits(self) -> None:
        """0x1d00ffff decodes to the Bitcoin genesis target."""
        assert Uint256.from_compact(Uint32(0x1D00FFFF)) == Uint256(0xFFFF << 208)

    def test_from_compact_small_sizes(self) -> None:
        """Sizes below three shift the mantissa down."""
        assert Uint256.from_compact(Uint32(0x01120000)) == Uint256(0x12)
        assert Uint256.from_compact(Uint32(0x02008000)) == Uint256(0x80)

    def test_from_compact_zero_mantissa_with_sign_bit(self) -> None:
        """A set sign bit on a zero value is not an error."""
        assert Uint256.from_compact(Uint32(0x01800000)) == Uint256(0)

    def test_from_compact_negative(self) -> None:
        """A set sign bit on a non-zero value is rejected."""
        with pytest.raises(CompactTargetError) as exc_info:
            Uint256.from_compact(Uint32(0x04923456))
        assert exc_info.value.reason == "negative"
        assert exc_info.value.bits == 0x04923456

    @pytest.mark.parametrize("bits", [0xFF123456, 0x23000100, 0x22010000, 0x21010000])
    def test_from_compact_overflow(self, bits: int) -> None:
        """Values that do not fit in 256 bits are rejected."""
        with pytest.raises(CompactTargetError) as exc_info:
            Uint256.from_compact(Uint32(bits))
        assert exc_info.value.reason == "overflow"

    def test_compact_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch compact decoding errors."""
        with pytest.raises(ValueError, match="0xff123456"):
            Uint256.from_compact(Uint32(0xFF123456))

    @given(st.integers(min_value=0, max_value=2**256 - 1))
    def test_compact_is_lossy_but_stable(self, raw: int) -> None:
        """Decoding never exceeds the original and re-encoding is idempotent."""
        value = Uint256(raw)
        decoded = Uint256.from_compact(value.to_compact())
        assert decoded <= value
        assert decoded.to_compact() == value.to_compact()
