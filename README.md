# curve25519

Group operations on Curve25519, written in plain Python with no
dependencies outside the standard library.

The package has four modules:

- `curve25519.field` — arithmetic in the field of integers modulo
  2^255 − 19 (`FieldElement`): addition, subtraction, multiplication,
  squaring, inversion (zero maps to zero), batch inversion with
  `FieldElement.batch_invert`, and square roots of ratios with
  `FieldElement.sqrt_ratio_i` and `FieldElement.invsqrt`.
- `curve25519.edwards` — points on the twisted Edwards form of the curve
  (`EdwardsPoint`) and their 32-byte "Edwards y" encoding
  (`CompressedEdwardsY`), with addition, subtraction, negation, scalar
  multiplication, doubling, cofactor checks (`is_small_order`,
  `is_torsion_free`, `mul_by_cofactor`), `sum_points`, and conversion to
  the Montgomery model. It also defines `ED25519_BASEPOINT_POINT`,
  `ED25519_BASEPOINT_COMPRESSED`, `BASEPOINT_ORDER` and `EIGHT_TORSION`.
- `curve25519.montgomery` — u-coordinates on the Montgomery form
  (`MontgomeryPoint`), scalar multiplication by the Montgomery ladder,
  conversion back to Edwards form with a chosen sign, the Elligator 2 map
  (`elligator_encode`), `nonspec_map_to_curve` (SHA-512 of the input,
  then Elligator 2, then multiplication by the cofactor; not a uniform
  hash-to-curve), and `X25519_BASEPOINT`.
- `curve25519.multiscalar` — `multiscalar_mul`, `vartime_multiscalar_mul`
  and `optional_multiscalar_mul` for sums a₁P₁ + … + aₙPₙ, plus
  `VartimeEdwardsPrecomputation` for sums that reuse a fixed set of
  points. Mismatched numbers of scalars and points raise `ValueError`.

Scalars are ordinary Python integers. They are used as given, without
reduction modulo the group order.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Examples

Encoding and decoding points:

```python
from curve25519.edwards import EdwardsPoint

B = EdwardsPoint.mul_base(1)            # the Ed25519 basepoint
encoded = B.compress()
assert encoded.decompress() == B
```

`CompressedEdwardsY.decompress()` returns `None` when the bytes are not
the y-coordinate of a curve point. `CompressedEdwardsY` and
`MontgomeryPoint` raise `ValueError` unless given exactly 32 bytes.

Group arithmetic:

```python
from curve25519.edwards import EdwardsPoint, sum_points

B = EdwardsPoint.mul_base(1)
assert B + B == B.double() == 2 * B
assert B - B == EdwardsPoint.identity()
assert sum_points([B, B, B]) == B * 3

assert B.is_torsion_free()
assert not B.is_small_order()
```

Moving between the Edwards and Montgomery models:

```python
from curve25519.edwards import EdwardsPoint

P = EdwardsPoint.mul_base(1234)
u = P.to_montgomery()
assert u * 5 == (P * 5).to_montgomery()
assert u.to_edwards(0) in (P, -P)
```

Multiscalar multiplication:

```python
from curve25519.edwards import EdwardsPoint
from curve25519.multiscalar import (
    VartimeEdwardsPrecomputation,
    multiscalar_mul,
    vartime_multiscalar_mul,
)

B = EdwardsPoint.mul_base(1)
P, Q = B * 7, B * 11
assert multiscalar_mul([2, 3], [P, Q]) == B * (2 * 7 + 3 * 11)
assert vartime_multiscalar_mul([2, 3], [P, Q]) == multiscalar_mul([2, 3], [P, Q])

pre = VartimeEdwardsPrecomputation([P])
assert pre.vartime_mixed_multiscalar_mul([2], [3], [Q]) == B * 47
```

## What it does not do

- There are no precomputed basepoint tables: `EdwardsPoint.mul_base`
  multiplies the basepoint by plain double-and-add, like any other point.
- There are no signature, key-exchange or serialization APIs; the package
  stops at field and group arithmetic and the 32-byte point encodings.
- It is not constant-time and is not meant to protect secrets against
  side-channel attacks. The "constant-time" and "variable-time" names
  describe which algorithm is used, not a timing guarantee.