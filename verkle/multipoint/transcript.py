"""Fiat-Shamir transcript built on SHA-256."""

from __future__ import annotations

import hashlib

from .field import fr_from_le_bytes_mod_order, fr_to_bytes
from .group import Element


class Transcript:
    """Accumulates labelled messages and derives scalar challenges."""

    def __init__(self, label: bytes) -> None:
        self._state = bytearray(label)

    def _append_message(self, message: bytes, label: bytes) -> None:
        self._state += label
        self._state += message

    def append_u64(self, label: bytes, number: int) -> None:
        self._state += label
        self._state += number.to_bytes(8, "big")

    def challenge_scalar(self, label: bytes) -> int:
        self.domain_sep(label)
        digest = hashlib.sha256(bytes(self._state)).digest()
        self._state.clear()
        scalar = fr_from_le_bytes_mod_order(digest)
        self.append_scalar(label, scalar)
        return scalar

    def append_point(self, label: bytes, point: Element) -> None:
        self._append_message(point.to_bytes(), label)

    def append_scalar(self, label: bytes, scalar: int) -> None:
        self._append_message(fr_to_bytes(scalar), label)

    def domain_sep(self, label: bytes) -> None:
        self._state += label