"""Arithmetic in the scalar field of the banderwagon group."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

MODULUS = 0x1CFB69D4CA675F520CCE760202687600FF8F87007419047174FD06B52876E7E1
FR_BYTES = 32


def inner_product(a: Iterable[int], b: Iterable[int]) -> int:
    """Return the sum of the pairwise products of two scalar vectors."""
    return sum(x * y for x, y in zip(a, b)) % MODULUS


def powers_of(point: int, n: int) -> list[int]:
    """Return [1, point, point^2, ..., point^(n-1)]."""
    powers = [1]
    for _ in range(1, n):
        powers.append(powers[-1] * point % MODULUS)
    return powers


def inverse(value: int) -> int:
    """Return the multiplicative inverse of a non-zero scalar."""
    value %= MODULUS
    if value == 0:
        raise ZeroDivisionError("zero has no inverse")
    return pow(value, -1, MODULUS)


def batch_inversion(values: Sequence[int]) -> list[int]:
    """Invert every non-zero value at once; zeros stay zero."""
    reduced = [v % MODULUS for v in values]
    prefix = []
    acc = 1
    for v in reduced:
        prefix.append(acc)
        if v:
            acc = acc * v % MODULUS
    inv = pow(acc, -1, MODULUS)
    result = [0] * len(reduced)
    for i in reversed(range(len(reduced))):
        v = reduced[i]
        if v:
            result[i] = inv * prefix[i] % MODULUS
            inv = inv * v % MODULUS
    return result


def fr_to_bytes(value: int) -> bytes:
    """Serialise a scalar as 32 little-endian bytes."""
    return (value % MODULUS).to_bytes(FR_BYTES, "little")


def fr_from_bytes(data: bytes) -> int:
    """Parse a canonical 32-byte little-endian scalar."""
    if len(data) != FR_BYTES:
        raise ValueError(f"expected {FR_BYTES} bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= MODULUS:
        raise ValueError("scalar is not canonical")
    return value


def fr_from_le_bytes_mod_order(data: bytes) -> int:
    """Interpret bytes as a little-endian integer reduced modulo the field order."""
    return int.from_bytes(data, "little") % MODULUS