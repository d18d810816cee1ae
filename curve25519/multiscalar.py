"""Multiscalar multiplication on the Edwards form of Curve25519.

Computes sums of the form a_1 P_1 + ... + a_n P_n. Scalars are Python
integers and are used as given, without reduction modulo the group order.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Sequence

from .edwards import EdwardsPoint

_WINDOW_BITS = 4
_WINDOW_MASK = (1 << _WINDOW_BITS) - 1
_PIPPENGER_THRESHOLD = 190

_Table = Sequence[EdwardsPoint]


def _collect(scalars: Iterable[object], points: Iterable[object]) -> tuple[list[int], list]:
    ks = [operator.index(s) for s in scalars]  # type: ignore[arg-type]
    ps = list(points)
    if len(ks) != len(ps):
        raise ValueError(
            f"number of scalars ({len(ks)}) does not match number of points ({len(ps)})"
        )
    return ks, ps


def _lookup_table(point: EdwardsPoint) -> list[EdwardsPoint]:
    """Return the multiples 0P, 1P, ..., 15P."""
    table = [EdwardsPoint.identity(), point]
    while len(table) <= _WINDOW_MASK:
        table.append(table[-1] + point)
    return table


def _signed_term(k: int, table: _Table) -> tuple[int, _Table]:
    if k < 0:
        return -k, [-entry for entry in table]
    return k, table


def _straus(terms: list[tuple[int, _Table]], skip_zero: bool) -> EdwardsPoint:
    """Interleaved fixed-window multiplication over nonnegative scalars."""
    max_bits = max((k.bit_length() for k, _ in terms), default=0)
    windows = max(1, -(-max_bits // _WINDOW_BITS))
    result = EdwardsPoint.identity()
    for window in reversed(range(windows)):
        result = result.mul_by_pow_2(_WINDOW_BITS)
        shift = window * _WINDOW_BITS
        for k, table in terms:
            digit = (k >> shift) & _WINDOW_MASK
            if digit or not skip_zero:
                result = result + table[digit]
    return result


def _pippenger_window(size: int) -> int:
    if size < 500:
        return 6
    if size < 800:
        return 7
    return 8


def _pippenger(ks: list[int], ps: list[EdwardsPoint]) -> EdwardsPoint:
    """Bucket-method multiplication; variable time."""
    terms = [(-k, -p) if k < 0 else (k, p) for k, p in zip(ks, ps)]
    width = _pippenger_window(len(terms))
    mask = (1 << width) - 1
    max_bits = max((k.bit_length() for k, _ in terms), default=0)
    windows = max(1, -(-max_bits // width))

    result = EdwardsPoint.identity()
    for window in reversed(range(windows)):
        result = result.mul_by_pow_2(width)
        shift = window * width
        buckets: list[EdwardsPoint | None] = [None] * mask
        for k, point in terms:
            digit = (k >> shift) & mask
            if digit:
                bucket = buckets[digit - 1]
                buckets[digit - 1] = point if bucket is None else bucket + point
        running = EdwardsPoint.identity()
        window_sum = EdwardsPoint.identity()
        for bucket in reversed(buckets):
            if bucket is not None:
                running = running + bucket
            window_sum = window_sum + running
        result = result + window_sum
    return result


def multiscalar_mul(scalars: Iterable[object], points: Iterable[EdwardsPoint]) -> EdwardsPoint:
    """Compute the sum of scalars[i] * points[i] with a uniform operation pattern."""
    ks, ps = _collect(scalars, points)
    terms = [_signed_term(k, _lookup_table(p)) for k, p in zip(ks, ps)]
    return _straus(terms, skip_zero=False)


def optional_multiscalar_mul(
    scalars: Iterable[object], points: Iterable[EdwardsPoint | None]
) -> EdwardsPoint | None:
    """Variable-time multiscalar multiplication; None if any point is None."""
    ks, ps = _collect(scalars, points)
    if any(p is None for p in ps):
        return None
    if len(ks) < _PIPPENGER_THRESHOLD:
        terms = [_signed_term(k, _lookup_table(p)) for k, p in zip(ks, ps)]
        return _straus(terms, skip_zero=True)
    return _pippenger(ks, ps)


def vartime_multiscalar_mul(
    scalars: Iterable[object], points: Iterable[EdwardsPoint]
) -> EdwardsPoint:
    """Compute the sum of scalars[i] * points[i] in variable time."""
    result = optional_multiscalar_mul(scalars, points)
    if result is None:
        raise ValueError("points must not be None")
    return result


class VartimeEdwardsPrecomputation:
    """Precomputed tables for a fixed set of static points."""

    __slots__ = ("_static_tables",)

    def __init__(self, static_points: Iterable[EdwardsPoint]) -> None:
        self._static_tables = [_lookup_table(p) for p in static_points]

    def __len__(self) -> int:
        return len(self._static_tables)

    def optional_mixed_multiscalar_mul(
        self,
        static_scalars: Iterable[object],
        dynamic_scalars: Iterable[object],
        dynamic_points: Iterable[EdwardsPoint | None],
    ) -> EdwardsPoint | None:
        """Sum static and dynamic terms; None if any dynamic point is None."""
        static_ks, tables = _collect(static_scalars, self._static_tables)
        dynamic_ks, dynamic_ps = _collect(dynamic_scalars, dynamic_points)
        if any(p is None for p in dynamic_ps):
            return None
        terms = [_signed_term(k, table) for k, table in zip(static_ks, tables)]
        terms.extend(
            _signed_term(k, _lookup_table(p)) for k, p in zip(dynamic_ks, dynamic_ps)
        )
        return _straus(terms, skip_zero=True)

    def vartime_mixed_multiscalar_mul(
        self,
        static_scalars: Iterable[object],
        dynamic_scalars: Iterable[object],
        dynamic_points: Iterable[EdwardsPoint],
    ) -> EdwardsPoint:
        """Sum static and dynamic terms in variable time."""
        result = self.optional_mixed_multiscalar_mul(
            static_scalars, dynamic_scalars, dynamic_points
        )
        if result is None:
            raise ValueError("dynamic points must not be None")
        return result