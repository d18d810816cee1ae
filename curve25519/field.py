"""Arithmetic in the prime field of order p = 2**255 - 19."""

from __future__ import annotations

from collections.abc import Iterable

P = 2**255 - 19
"""The field modulus."""

_LOW_255_BITS = (1 << 255) - 1
_P58_EXPONENT = (P - 5) // 8


class FieldElement:
    """An immutable element of GF(2**255 - 19)."""

    __slots__ = ("_value",)

    ZERO: FieldElement
    ONE: FieldElement
    MINUS_ONE: FieldElement
    SQRT_M1: FieldElement

    def __init__(self, value: int) -> None:
        self._value = value % P

    @property
    def value(self) -> int:
        """The canonical integer representative in [0, p)."""
        return self._value

    @classmethod
    def from_bytes(cls, data: bytes) -> FieldElement:
        """Decode 32 little-endian bytes, ignoring the top bit and reducing mod p."""
        raw = bytes(data)
        if len(raw) != 32:
            raise ValueError(f"field element encoding must be 32 bytes, got {len(raw)}")
        return cls(int.from_bytes(raw, "little") & _LOW_255_BITS)

    def to_bytes(self) -> bytes:
        """Return the canonical 32-byte little-endian encoding."""
        return self._value.to_bytes(32, "little")

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def is_negative(self) -> bool:
        """True if the low bit of the canonical encoding is set."""
        return bool(self._value & 1)

    def is_zero(self) -> bool:
        return self._value == 0

    def square(self) -> FieldElement:
        return FieldElement(self._value * self._value)

    def square2(self) -> FieldElement:
        """Return 2 * self**2."""
        return FieldElement(2 * self._value * self._value)

    def pow2k(self, k: int) -> FieldElement:
        """Square this element k times, k > 0."""
        if k <= 0:
            raise ValueError("pow2k requires k > 0")
        return FieldElement(pow(self._value, 1 << k, P))

    def invert(self) -> FieldElement:
        """Return the multiplicative inverse; zero maps to zero."""
        return FieldElement(pow(self._value, P - 2, P))

    def pow_p58(self) -> FieldElement:
        """Raise to the power (p - 5) / 8 = 2**252 - 3."""
        return FieldElement(pow(self._value, _P58_EXPONENT, P))

    def negate_if(self, flag: bool) -> FieldElement:
        """Return -self if flag is true, otherwise self."""
        return -self if flag else self

    @staticmethod
    def sqrt_ratio_i(u: FieldElement, v: FieldElement) -> tuple[bool, FieldElement]:
        """Compute the nonnegative sqrt(u/v) or sqrt(i*u/v).

        Returns (True, +sqrt(u/v)) if v is nonzero and u/v is square,
        (True, 0) if u is zero, (False, 0) if v is zero and u is nonzero,
        and (False, +sqrt(i*u/v)) if u/v is nonsquare.
        """
        i = FieldElement.SQRT_M1
        v3 = v.square() * v
        v7 = v3.square() * v
        r = (u * v3) * (u * v7).pow_p58()
        check = v * r.square()

        minus_u = -u
        correct_sign_sqrt = check == u
        flipped_sign_sqrt = check == minus_u
        flipped_sign_sqrt_i = check == minus_u * i

        if flipped_sign_sqrt or flipped_sign_sqrt_i:
            r = i * r
        r = r.negate_if(r.is_negative())

        return correct_sign_sqrt or flipped_sign_sqrt, r

    def invsqrt(self) -> tuple[bool, FieldElement]:
        """Attempt to compute the nonnegative sqrt(1/self)."""
        return FieldElement.sqrt_ratio_i(FieldElement.ONE, self)

    @staticmethod
    def batch_invert(inputs: Iterable[FieldElement]) -> list[FieldElement]:
        """Invert every element with a single inversion; zeros stay zero."""
        elements = list(inputs)
        prefixes = []
        acc = FieldElement.ONE
        for element in elements:
            prefixes.append(acc)
            if not element.is_zero():
                acc = acc * element

        acc = acc.invert()

        result = list(elements)
        for index in reversed(range(len(elements))):
            element = elements[index]
            if element.is_zero():
                continue
            result[index] = acc * prefixes[index]
            acc = acc * element
        return result

    def __add__(self, other: object) -> FieldElement:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement(self._value + other._value)

    def __sub__(self, other: object) -> FieldElement:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement(self._value - other._value)

    def __mul__(self, other: object) -> FieldElement:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement(self._value * other._value)

    def __neg__(self) -> FieldElement:
        return FieldElement(-self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(("FieldElement", self._value))

    def __repr__(self) -> str:
        return f"FieldElement({self.to_bytes().hex()})"


FieldElement.ZERO = FieldElement(0)
FieldElement.ONE = FieldElement(1)
FieldElement.MINUS_ONE = FieldElement(-1)
FieldElement.SQRT_M1 = FieldElement(pow(2, (P - 1) // 4, P))