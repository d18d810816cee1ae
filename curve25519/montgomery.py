"""Scalar multiplication on the Montgomery u-line of Curve25519.

A MontgomeryPoint holds the affine u-coordinate of a point on either
the curve or its quadratic twist.  Multiplication by an integer
scalar uses the Montgomery ladder of Costello and Smith.
"""

from __future__ import annotations

import hashlib
import operator
from dataclasses import dataclass

from .edwards import CompressedEdwardsY, EdwardsPoint
from .field import FieldElement

MONTGOMERY_A = FieldElement(486662)
"""The Montgomery curve constant A."""

MONTGOMERY_A_NEG = -MONTGOMERY_A
"""The negation of A."""

APLUS2_OVER_FOUR = FieldElement(121666)
"""(A + 2) / 4, used by the ladder step."""


class MontgomeryPoint:
    """The u-coordinate of a point on Curve25519 or its twist, as 32 bytes."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes = bytes(32)) -> None:
        raw = bytes(data)
        if len(raw) != 32:
            raise ValueError(f"Montgomery point must be 32 bytes, got {len(raw)}")
        self._data = raw

    @classmethod
    def identity(cls) -> MontgomeryPoint:
        """The identity's image on the u-line, u = 0."""
        return cls(bytes(32))

    def to_bytes(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def _field_element(self) -> FieldElement:
        return FieldElement.from_bytes(self._data)

    def to_edwards(self, sign: int) -> EdwardsPoint | None:
        """Lift to an Edwards point with the given sign of x (0 positive, 1 negative).

        Returns None if u belongs to a point on the twist.
        """
        u = self._field_element()
        # u = -1 is the exceptional point of the birational map; it lies on the twist.
        if u == FieldElement.MINUS_ONE:
            return None
        one = FieldElement.ONE
        y = (u - one) * (u + one).invert()
        encoded = bytearray(y.to_bytes())
        encoded[31] ^= (operator.index(sign) << 7) & 0xFF
        return CompressedEdwardsY(bytes(encoded)).decompress()

    def __mul__(self, scalar: object) -> MontgomeryPoint:
        try:
            k = operator.index(scalar)  # type: ignore[arg-type]
        except TypeError:
            return NotImplemented
        # u([-k]P) = u([k]P), so the sign of the scalar does not matter.
        k = abs(k)
        affine_u = self._field_element()
        x0 = _ProjectivePoint(FieldElement.ONE, FieldElement.ZERO)
        x1 = _ProjectivePoint(affine_u, FieldElement.ONE)
        swap = 0
        for bit in (int(c) for c in bin(k)[2:]):
            swap ^= bit
            if swap:
                x0, x1 = x1, x0
            swap = bit
            x0, x1 = _differential_add_and_double(x0, x1, affine_u)
        if swap:
            x0, x1 = x1, x0
        return x0.as_affine()

    def __rmul__(self, scalar: object) -> MontgomeryPoint:
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MontgomeryPoint):
            return NotImplemented
        return self._field_element() == other._field_element()

    def __hash__(self) -> int:
        return hash(("MontgomeryPoint", self._field_element().to_bytes()))

    def __repr__(self) -> str:
        return f"MontgomeryPoint({self._data.hex()})"


@dataclass(frozen=True)
class _ProjectivePoint:
    """A point (U : W) on the projective line, the Kummer line of the curve."""

    U: FieldElement
    W: FieldElement

    def as_affine(self) -> MontgomeryPoint:
        """Return u = U / W, or u = 0 when W = 0."""
        return MontgomeryPoint((self.U * self.W.invert()).to_bytes())


def _differential_add_and_double(
    P: _ProjectivePoint, Q: _ProjectivePoint, affine_PmQ: FieldElement
) -> tuple[_ProjectivePoint, _ProjectivePoint]:
    """Return (u([2]P), u(P + Q)) given u(P), u(Q) and the affine u(P - Q)."""
    t0 = P.U + P.W
    t1 = P.U - P.W
    t2 = Q.U + Q.W
    t3 = Q.U - Q.W

    t4 = t0.square()
    t5 = t1.square()
    t6 = t4 - t5  # 4 U_P W_P

    t7 = t0 * t3
    t8 = t1 * t2
    t9 = t7 + t8
    t10 = t7 - t8

    t11 = t9.square()
    t12 = t10.square()

    t13 = APLUS2_OVER_FOUR * t6
    t14 = t4 * t5
    t15 = t13 + t5
    t16 = t6 * t15

    t17 = affine_PmQ * t12
    t18 = t11

    return _ProjectivePoint(t14, t16), _ProjectivePoint(t18, t17)


def elligator_encode(r0: FieldElement) -> MontgomeryPoint:
    """Map a field element to a Montgomery point with the Elligator 2 map."""
    one = FieldElement.ONE
    d_1 = one + r0.square2()
    d = MONTGOMERY_A_NEG * d_1.invert()

    d_sq = d.square()
    au = MONTGOMERY_A * d

    inner = d_sq + au + one
    eps = d * inner

    eps_is_sq, _ = FieldElement.sqrt_ratio_i(eps, one)

    a_temp = FieldElement.ZERO if eps_is_sq else MONTGOMERY_A
    u = (d + a_temp).negate_if(not eps_is_sq)
    return MontgomeryPoint(u.to_bytes())


def nonspec_map_to_curve(data: bytes) -> EdwardsPoint:
    """Map the SHA-512 digest of data to an Edwards point.

    This is not a hash-to-curve function: its output is not uniformly
    distributed.
    """
    digest = hashlib.sha512(bytes(data)).digest()
    res = digest[:32]
    sign_bit = (res[31] & 0x80) >> 7
    fe = FieldElement.from_bytes(res)
    lifted = elligator_encode(fe).to_edwards(sign_bit)
    if lifted is None:
        raise ValueError("Montgomery conversion to Edwards point in Elligator failed")
    return lifted.mul_by_cofactor()


X25519_BASEPOINT = MontgomeryPoint(bytes([9]) + bytes(31))
"""The X25519 basepoint, u = 9."""