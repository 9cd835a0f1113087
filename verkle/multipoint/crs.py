"""Common reference string: the generators used for commitments."""

from __future__ import annotations

import functools
import hashlib
import itertools
from collections.abc import Sequence

from .group import Element, multi_scalar_mul, try_reduce_to_element

DEFAULT_SEED = b"eth_verkle_oct_2021"
DEFAULT_SIZE = 256


def generate_random_elements(num_required_points: int, seed: bytes) -> list[Element]:
    """Derive group elements by hashing the seed with an increasing counter."""
    candidates = (
        try_reduce_to_element(hashlib.sha256(seed + i.to_bytes(8, "big")).digest())
        for i in itertools.count()
    )
    return list(itertools.islice((e for e in candidates if e is not None), num_required_points))


@functools.lru_cache(maxsize=None)
def _default_crs_bytes() -> tuple[bytes, ...]:
    return tuple(CRS.generate(DEFAULT_SIZE, DEFAULT_SEED).to_bytes())


class CRS:
    """A vector of generators G and an extra point Q."""

    def __init__(self, G: Sequence[Element], Q: Element) -> None:
        self.G = list(G)
        self.Q = Q
        self.n = len(self.G)

    @classmethod
    def generate(cls, n: int, seed: bytes) -> CRS:
        points = generate_random_elements(n, seed)
        if len({p.to_bytes() for p in points}) != len(points):
            raise ValueError("crs has duplicated points")
        return cls(points, Element.generator())

    @classmethod
    def default(cls) -> CRS:
        return cls.from_bytes(_default_crs_bytes())

    def max_number_of_elements(self) -> int:
        return self.n

    @classmethod
    def from_bytes(cls, chunks: Sequence[bytes]) -> CRS:
        """Build from 64-byte uncompressed points; the last one is Q."""
        if not chunks:
            raise ValueError("bytes vector should not be empty")
        *g_chunks, q_chunk = chunks
        return cls(
            [Element.from_bytes_unchecked_uncompressed(c) for c in g_chunks],
            Element.from_bytes_unchecked_uncompressed(q_chunk),
        )

    @classmethod
    def from_hex(cls, hex_strings: Sequence[str]) -> CRS:
        return cls.from_bytes([bytes.fromhex(h) for h in hex_strings])

    def to_bytes(self) -> list[bytes]:
        return [p.to_bytes_uncompressed() for p in self.G] + [self.Q.to_bytes_uncompressed()]

    def to_hex(self) -> list[str]:
        return [b.hex() for b in self.to_bytes()]

    def commit_lagrange_poly(self, polynomial) -> Element:
        return multi_scalar_mul(self.G, list(polynomial.values))

    def __getitem__(self, index: int) -> Element:
        return self.G[index]