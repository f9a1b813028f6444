"""Fixed-Width Unsigned Integer Types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar, Literal, SupportsIndex

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self

from chainparams.exceptions import CompactTargetError


class BaseUint(int):
    """
    A base class for fixed-width unsigned integers that inherits from `int`.

    Values only combine with values of the same width. Mixing widths, or
    mixing with a plain `int`, raises `TypeError` instead of silently
    widening, since a consensus constant of the wrong width is a bug.
    """

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: Any) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            TypeError: If `value` is not an `int` (booleans are rejected).
            OverflowError: If `value` is outside the range [0, 2**BITS - 1].
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        int_value = int(value)
        if not (0 <= int_value <= cls.max_value()):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def max_value(cls) -> int:
        """Return the largest value representable by this type."""
        return 2**cls.BITS - 1

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            # Range checking happens in `validate` so 256-bit bounds never
            # reach the core int schema.
            json_schema=core_schema.no_info_after_validator_function(
                validate, core_schema.int_schema()
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(schema)
        json_schema.update(format=f"uint{cls.BITS}")
        return json_schema

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "little",
        *,
        signed: bool = False,
    ) -> bytes:
        """
        Return an array of bytes representing the integer.

        Defaults to little-endian and the natural byte width of the type.
        """
        actual_length = self.BITS // 8 if length is None else int(length)
        return super().to_bytes(length=actual_length, byteorder=byteorder, signed=signed)

    def _check_operand(self, other: Any, op_symbol: str) -> None:
        """Raise `TypeError` unless `other` has exactly this type."""
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Unsupported operand type(s) for {op_symbol}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )

    def __add__(self, other: Any) -> Self:
        """Handle the addition operator (`+`)."""
        self._check_operand(other, "+")
        return type(self)(int(self) + int(other))

    def __sub__(self, other: Any) -> Self:
        """Handle the subtraction operator (`-`)."""
        self._check_operand(other, "-")
        return type(self)(int(self) - int(other))

    def __mul__(self, other: Any) -> Self:
        """Handle the multiplication operator (`*`)."""
        self._check_operand(other, "*")
        return type(self)(int(self) * int(other))

    def __floordiv__(self, other: Any) -> Self:
        """
        Handle the floor division operator (`//`).

        Division by zero raises `ZeroDivisionError`, exactly as for `int`.
        """
        self._check_operand(other, "//")
        return type(self)(int(self) // int(other))

    def __mod__(self, other: Any) -> Self:
        """Handle the modulo operator (`%`)."""
        self._check_operand(other, "%")
        return type(self)(int(self) % int(other))

    def __radd__(self, other: Any) -> Self:
        """Reject reverse addition; `other` is never the same type here."""
        self._check_operand(other, "+")
        return type(self)(int(other) + int(self))

    def __rsub__(self, other: Any) -> Self:
        """Reject reverse subtraction."""
        self._check_operand(other, "-")
        return type(self)(int(other) - int(self))

    def __rmul__(self, other: Any) -> Self:
        """Reject reverse multiplication."""
        self._check_operand(other, "*")
        return type(self)(int(other) * int(self))

    def __rfloordiv__(self, other: Any) -> Self:
        """Reject reverse floor division."""
        self._check_operand(other, "//")
        return type(self)(int(other) // int(self))

    def __rmod__(self, other: Any) -> Self:
        """Reject reverse modulo."""
        self._check_operand(other, "%")
        return type(self)(int(other) % int(self))

    def __and__(self, other: Any) -> Self:
        """Handle the bitwise AND operator (`&`)."""
        self._check_operand(other, "&")
        return type(self)(int(self) & int(other))

    def __or__(self, other: Any) -> Self:
        """Handle the bitwise OR operator (`|`)."""
        self._check_operand(other, "|")
        return type(self)(int(self) | int(other))

    def __eq__(self, other: object) -> bool:
        """Handle the equality operator (`==`)."""
        self._check_operand(other, "==")
        return int(self) == int(other)  # type: ignore[call-overload]

    def __ne__(self, other: object) -> bool:
        """Handle the inequality operator (`!=`)."""
        self._check_operand(other, "!=")
        return int(self) != int(other)  # type: ignore[call-overload]

    def __lt__(self, other: Any) -> bool:
        """Handle the less-than operator (`<`)."""
        self._check_operand(other, "<")
        return int(self) < int(other)

    def __le__(self, other: Any) -> bool:
        """Handle the less-than-or-equal-to operator (`<=`)."""
        self._check_operand(other, "<=")
        return int(self) <= int(other)

    def __gt__(self, other: Any) -> bool:
        """Handle the greater-than operator (`>`)."""
        self._check_operand(other, ">")
        return int(self) > int(other)

    def __ge__(self, other: Any) -> bool:
        """Handle the greater-than-or-equal-to operator (`>=`)."""
        self._check_operand(other, ">=")
        return int(self) >= int(other)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    def __hash__(self) -> int:
        return hash((type(self), int(self)))


class Uint32(BaseUint):
    """A 32-bit unsigned integer (timestamps, heights, block counts)."""

    BITS = 32


class Uint64(BaseUint):
    """A 64-bit unsigned integer (durations in seconds, words of a Uint256)."""

    BITS = 64


_WORD_BITS = 64
_WORD_MASK = 2**_WORD_BITS - 1
_WORD_COUNT = 4


class Uint256(BaseUint):
    """
    A 256-bit unsigned integer, used for proof-of-work targets.

    Word order: a Uint256 is viewed as four 64-bit words, least-significant
    word first. `words[0]` holds bits 0..63 and `words[3]` holds bits 192..255.
    """

    BITS = 256

    @classmethod
    def from_words(cls, words: Sequence[int]) -> Uint256:
        """
        Build a value from four 64-bit words, least-significant word first.

        Raises:
            ValueError: If `words` does not contain exactly four entries.
            OverflowError: If any word does not fit in 64 bits.
        """
        if len(words) != _WORD_COUNT:
            raise ValueError(f"Uint256 requires exactly {_WORD_COUNT} words, got {len(words)}")

        value = 0
        for index, word in enumerate(words):
            # Reuse the Uint64 range check for each word.
            value |= int(Uint64(word)) << (_WORD_BITS * index)
        return cls(value)

    @property
    def words(self) -> tuple[Uint64, Uint64, Uint64, Uint64]:
        """The four 64-bit words of this value, least-significant word first."""
        value = int(self)
        w0, w1, w2, w3 = (
            Uint64((value >> (_WORD_BITS * index)) & _WORD_MASK) for index in range(_WORD_COUNT)
        )
        return w0, w1, w2, w3

    def to_compact(self) -> Uint32:
        """
        Encode this value in the compact "nBits" form used in block headers.

        The top byte holds the size in bytes. The low three bytes hold the
        most significant bytes of the value. The encoding is lossy: only the
        leading 3 bytes survive.

        The mantissa's 0x00800000 bit is a sign bit, so a mantissa with that
        bit set is shifted down one byte and the size bumped instead.
        """
        value = int(self)
        size = (value.bit_length() + 7) // 8

        if size <= 3:
            mantissa = value << (8 * (3 - size))
        else:
            mantissa = value >> (8 * (size - 3))

        if mantissa & 0x00800000:
            mantissa >>= 8
            size += 1

        return Uint32((size << 24) | mantissa)

    @classmethod
    def from_compact(cls, bits: Uint32) -> Uint256:
        """
        Decode a compact "nBits" value.

        Raises:
            CompactTargetError: If the encoded value is negative or does not
                fit in 256 bits.
        """
        raw = int(bits)
        size = raw >> 24
        mantissa = raw & 0x007FFFFF

        if size <= 3:
            value = mantissa >> (8 * (3 - size))
        else:
            value = mantissa << (8 * (size - 3))

        if value != 0 and raw & 0x00800000:
            raise CompactTargetError(raw, "negative")
        if value != 0 and (
            size > 34 or (mantissa > 0xFF and size > 33) or (mantissa > 0xFFFF and size > 32)
        ):
            raise CompactTargetError(raw, "overflow")

        return cls(value)
