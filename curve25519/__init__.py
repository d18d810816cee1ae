"""Field, Edwards, Montgomery and multiscalar arithmetic on Curve25519."""

__version__ = "4.0.0"

__all__ = ["edwards", "field", "montgomery", "multiscalar"]