"""Verkle primitives: commitments, proofs, trie metadata and key-value storage."""

__version__ = "0.1.0"