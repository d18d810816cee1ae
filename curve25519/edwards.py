"""Group operations on the twisted Edwards form of Curve25519.

Points are held in extended twisted coordinates (X : Y : Z : T) with
x = X/Z, y = Y/Z and xy = T/Z, and combined with the complete
formulas of Hisil, Wong, Carter and Dawson.  Scalars are Python
integers; they are used as given, without reduction modulo the group
order, so unreduced scalars act on torsion components as expected.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable
from itertools import count

from .field import FieldElement

EDWARDS_D = -FieldElement(121665) * FieldElement(121666).invert()
"""The curve constant d = -121665/121666."""

EDWARDS_D2 = EDWARDS_D + EDWARDS_D
"""The constant 2d."""

BASEPOINT_ORDER = 2**252 + 27742317777372353535851937790883648493
"""The order l of the prime-order subgroup generated by the basepoint."""

_COFACTOR_LOG2 = 3


def _as_int(scalar: object) -> int:
    return operator.index(scalar)  # type: ignore[arg-type]


class CompressedEdwardsY:
    """A point encoded as its y-coordinate plus the sign of x in the top bit."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        raw = bytes(data)
        if len(raw) != 32:
            raise ValueError(f"compressed Edwards point must be 32 bytes, got {len(raw)}")
        self._data = raw

    @classmethod
    def from_slice(cls, data: bytes) -> CompressedEdwardsY:
        """Build from a byte sequence, which must be exactly 32 bytes long."""
        return cls(data)

    @classmethod
    def identity(cls) -> CompressedEdwardsY:
        """The encoding of the identity point (0, 1)."""
        return cls(b"\x01" + bytes(31))

    def to_bytes(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def decompress(self) -> EdwardsPoint | None:
        """Return the encoded point, or None if y is not a curve coordinate."""
        Y = FieldElement.from_bytes(self._data)
        Z = FieldElement.ONE
        YY = Y.square()
        u = YY - Z
        v = YY * EDWARDS_D + Z
        is_valid_y, X = FieldElement.sqrt_ratio_i(u, v)
        if not is_valid_y:
            return None
        X = X.negate_if(bool(self._data[31] >> 7))
        return EdwardsPoint(X, Y, Z, X * Y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompressedEdwardsY):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(("CompressedEdwardsY", self._data))

    def __repr__(self) -> str:
        return f"CompressedEdwardsY({self._data.hex()})"


class EdwardsPoint:
    """A point on the Edwards form of Curve25519 in extended coordinates."""

    __slots__ = ("X", "Y", "Z", "T")

    def __init__(self, X: FieldElement, Y: FieldElement, Z: FieldElement, T: FieldElement) -> None:
        self.X = X
        self.Y = Y
        self.Z = Z
        self.T = T

    @classmethod
    def identity(cls) -> EdwardsPoint:
        return cls(FieldElement.ZERO, FieldElement.ONE, FieldElement.ONE, FieldElement.ZERO)

    def is_identity(self) -> bool:
        return self.X.is_zero() and self.Y == self.Z

    def is_valid(self) -> bool:
        """Check the curve equation and the Segre relation XY = ZT."""
        XX = self.X.square()
        YY = self.Y.square()
        ZZ = self.Z.square()
        on_curve = (YY - XX) * ZZ == ZZ.square() + EDWARDS_D * XX * YY
        on_segre_image = self.X * self.Y == self.Z * self.T
        return on_curve and on_segre_image

    def compress(self) -> CompressedEdwardsY:
        recip = self.Z.invert()
        x = self.X * recip
        y = self.Y * recip
        encoded = bytearray(y.to_bytes())
        encoded[31] ^= int(x.is_negative()) << 7
        return CompressedEdwardsY(bytes(encoded))

    def to_montgomery(self):
        """Map to the Montgomery u-line; the identity goes to u = 0."""
        from .montgomery import MontgomeryPoint

        u = (self.Z + self.Y) * (self.Z - self.Y).invert()
        return MontgomeryPoint(u.to_bytes())

    def double(self) -> EdwardsPoint:
        A = self.X.square()
        B = self.Y.square()
        C = self.Z.square2()
        D = -A
        E = (self.X + self.Y).square() - A - B
        G = D + B
        F = G - C
        H = D - B
        return EdwardsPoint(E * F, G * H, F * G, E * H)

    def mul_by_pow_2(self, k: int) -> EdwardsPoint:
        """Compute [2**k] self by k doublings; k must be positive."""
        if k <= 0:
            raise ValueError("mul_by_pow_2 requires k > 0")
        result = self
        for _ in range(k):
            result = result.double()
        return result

    def mul_by_cofactor(self) -> EdwardsPoint:
        """Return [8] self."""
        return self.mul_by_pow_2(_COFACTOR_LOG2)

    def is_small_order(self) -> bool:
        """True if this point lies in the eight-torsion subgroup."""
        return self.mul_by_cofactor().is_identity()

    def is_torsion_free(self) -> bool:
        """True if this point lies in the prime-order subgroup."""
        return (self * BASEPOINT_ORDER).is_identity()

    @classmethod
    def mul_base(cls, scalar: int) -> EdwardsPoint:
        """Multiply the Ed25519 basepoint by a scalar."""
        return ED25519_BASEPOINT_POINT * scalar

    @classmethod
    def vartime_double_scalar_mul_basepoint(cls, a: int, A: EdwardsPoint, b: int) -> EdwardsPoint:
        """Compute aA + bB where B is the Ed25519 basepoint."""
        return A * a + ED25519_BASEPOINT_POINT * b

    def __add__(self, other: object) -> EdwardsPoint:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        A = (self.Y - self.X) * (other.Y - other.X)
        B = (self.Y + self.X) * (other.Y + other.X)
        C = self.T * EDWARDS_D2 * other.T
        D = self.Z * other.Z
        D = D + D
        E = B - A
        F = D - C
        G = D + C
        H = B + A
        return EdwardsPoint(E * F, G * H, F * G, E * H)

    def __sub__(self, other: object) -> EdwardsPoint:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> EdwardsPoint:
        return EdwardsPoint(-self.X, self.Y, self.Z, -self.T)

    def __mul__(self, scalar: object) -> EdwardsPoint:
        try:
            k = _as_int(scalar)
        except TypeError:
            return NotImplemented
        point = self
        if k < 0:
            point, k = -point, -k
        result = EdwardsPoint.identity()
        for bit in bin(k)[2:]:
            result = result.double()
            if bit == "1":
                result = result + point
        return result

    def __rmul__(self, scalar: object) -> EdwardsPoint:
        return self.__mul__(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return (
            self.X * other.Z == other.X * self.Z
            and self.Y * other.Z == other.Y * self.Z
        )

    def __hash__(self) -> int:
        return hash(("EdwardsPoint", self.compress().to_bytes()))

    def __repr__(self) -> str:
        return f"EdwardsPoint(X={self.X!r}, Y={self.Y!r}, Z={self.Z!r}, T={self.T!r})"


def sum_points(points: Iterable[EdwardsPoint]) -> EdwardsPoint:
    """Add up a sequence of points; the empty sum is the identity."""
    total = EdwardsPoint.identity()
    for point in points:
        total = total + point
    return total


ED25519_BASEPOINT_COMPRESSED = CompressedEdwardsY(bytes([0x58]) + bytes([0x66]) * 31)
"""The Ed25519 basepoint, with y = 4/5 and x nonnegative, in compressed form."""

_decompressed_basepoint = ED25519_BASEPOINT_COMPRESSED.decompress()
if _decompressed_basepoint is None:  # pragma: no cover - fixed constant
    raise RuntimeError("basepoint encoding does not decompress")
ED25519_BASEPOINT_POINT: EdwardsPoint = _decompressed_basepoint
"""The Ed25519 basepoint."""


def _torsion_generator() -> EdwardsPoint:
    for y in count(2):
        candidate = CompressedEdwardsY(y.to_bytes(32, "little")).decompress()
        if candidate is None:
            continue
        torsion = candidate * BASEPOINT_ORDER
        if not torsion.mul_by_pow_2(2).is_identity():
            return torsion
    raise RuntimeError("unreachable")  # pragma: no cover


def _eight_torsion() -> tuple[EdwardsPoint, ...]:
    generator = _torsion_generator()
    points = [EdwardsPoint.identity()]
    for _ in range(7):
        points.append(points[-1] + generator)
    return tuple(points)


EIGHT_TORSION: tuple[EdwardsPoint, ...] = _eight_torsion()
"""The eight points of small order, as multiples 0..7 of an order-8 generator."""