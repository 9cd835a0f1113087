"""Commitment metadata stored for stems and branches of the trie."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..multipoint.field import fr_from_bytes, fr_to_bytes
from ..multipoint.group import COEFF_A, COEFF_D, Q, Element, SerializationError

_POINT_LEN = 64
_SCALAR_LEN = 32
_STEM_LEN = 31
STEM_META_LEN = 3 * _POINT_LEN + 3 * _SCALAR_LEN
BRANCH_META_LEN = _POINT_LEN + _SCALAR_LEN


def _point_from_bytes(data: bytes) -> Element:
    """Decode an uncompressed point, checking the curve equation and the subgroup."""
    x = int.from_bytes(data[:32], "little")
    y = int.from_bytes(data[32:], "little")
    if x >= Q or y >= Q:
        raise SerializationError("coordinate is not canonical")
    x2, y2 = x * x % Q, y * y % Q
    if (COEFF_A * x2 + y2) % Q != (1 + COEFF_D * x2 * y2) % Q:
        raise SerializationError("point is not on the curve")
    element = Element.from_bytes_unchecked_uncompressed(data)
    Element.from_bytes(element.to_bytes())
    return element


def _scalar_from_bytes(data: bytes) -> int:
    try:
        return fr_from_bytes(data)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc


@dataclass(frozen=True, repr=False)
class StemMeta:
    """Commitments C1, C2 and the stem commitment, with their scalar hashes."""

    c_1: Element
    hash_c1: int
    c_2: Element
    hash_c2: int
    stem_commitment: Element
    hash_stem_commitment: int

    def __repr__(self) -> str:
        return (
            "StemMeta("
            f"c_1={self.c_1.to_bytes().hex()}, "
            f"c_2={self.c_2.to_bytes().hex()}, "
            f"hash_c1={fr_to_bytes(self.hash_c1).hex()}, "
            f"hash_c2={fr_to_bytes(self.hash_c2).hex()}, "
            f"stem_commitment={self.stem_commitment.to_bytes().hex()}, "
            f"hash_stem_commitment={fr_to_bytes(self.hash_stem_commitment).hex()})"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> StemMeta:
        if len(data) != STEM_META_LEN:
            raise SerializationError(
                f"stem metadata must be {STEM_META_LEN} bytes, got {len(data)}"
            )
        points = [
            _point_from_bytes(data[i * _POINT_LEN:(i + 1) * _POINT_LEN]) for i in range(3)
        ]
        offset = 3 * _POINT_LEN
        scalars = [
            _scalar_from_bytes(data[offset + i * _SCALAR_LEN:offset + (i + 1) * _SCALAR_LEN])
            for i in range(3)
        ]
        return cls(
            c_1=points[0],
            hash_c1=scalars[0],
            c_2=points[1],
            hash_c2=scalars[1],
            stem_commitment=points[2],
            hash_stem_commitment=scalars[2],
        )

    def to_bytes(self) -> bytes:
        return b"".join(
            [
                self.c_1.to_bytes_uncompressed(),
                self.c_2.to_bytes_uncompressed(),
                self.stem_commitment.to_bytes_uncompressed(),
                fr_to_bytes(self.hash_c1),
                fr_to_bytes(self.hash_c2),
                fr_to_bytes(self.hash_stem_commitment),
            ]
        )


@dataclass(frozen=True, repr=False)
class BranchMeta:
    """A branch commitment and its scalar hash."""

    commitment: Element
    hash_commitment: int

    def __repr__(self) -> str:
        return (
            "BranchMeta("
            f"commitment={self.commitment.to_bytes().hex()}, "
            f"hash_commitment={fr_to_bytes(self.hash_commitment).hex()})"
        )

    @classmethod
    def zero(cls) -> BranchMeta:
        return cls(commitment=Element.zero(), hash_commitment=0)

    @classmethod
    def from_bytes(cls, data: bytes) -> BranchMeta:
        if len(data) < BRANCH_META_LEN:
            raise SerializationError(
                f"branch metadata needs {BRANCH_META_LEN} bytes, got {len(data)}"
            )
        return cls(
            commitment=_point_from_bytes(data[:_POINT_LEN]),
            hash_commitment=_scalar_from_bytes(data[_POINT_LEN:BRANCH_META_LEN]),
        )

    def to_bytes(self) -> bytes:
        return self.commitment.to_bytes_uncompressed() + fr_to_bytes(self.hash_commitment)


Meta = Union[StemMeta, BranchMeta]
# A branch child is either a 31-byte stem id or the metadata of a branch.
BranchChild = Union[bytes, BranchMeta]


def branch_child_from_bytes(data: bytes) -> BranchChild:
    """Decode a branch child: 31 bytes are a stem id, anything else branch metadata."""
    if len(data) == _STEM_LEN:
        return bytes(data)
    return BranchMeta.from_bytes(data)


def branch_child_to_bytes(child: BranchChild) -> bytes:
    if isinstance(child, BranchMeta):
        return child.to_bytes()
    if len(child) != _STEM_LEN:
        raise ValueError(f"stem id must be {_STEM_LEN} bytes, got {len(child)}")
    return bytes(child)