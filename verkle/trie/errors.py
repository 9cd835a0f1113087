"""Errors raised by the trie."""

from __future__ import annotations


class _KindedError(Exception):
    _MESSAGES: dict[str, str] = {}

    def __init__(self, kind: str, *details) -> None:
        if kind not in self._MESSAGES:
            raise ValueError(f"unknown error kind: {kind}")
        self.kind = kind
        self.details = details
        super().__init__(self._MESSAGES[kind])


class HintError(Exception):
    """An I/O failure while handling hints."""

    def __init__(self, cause: OSError | None = None) -> None:
        self.cause = cause
        super().__init__("General IO Error")


class VerificationError(_KindedError):
    """A proof or update could not be verified."""

    _MESSAGES = {
        "invalid_proof": "Invalid proof supplied",
        "unexpected_updated_length": "Invalid Length for Updated Values",
        "mismatched_key_length": "Mismatched Length of Supplied Keys from expected",
        "duplicate_keys": "All Keys must be unique",
        "old_value_is_populated": (
            "Since the extension was not present in the trie, "
            "the suffix cannot have any previous values"
        ),
        "empty_prefix": "Prefix Cannot be Empty",
    }


class ConfigError(_KindedError):
    """The trie configuration could not be loaded."""

    _MESSAGES = {
        "precomputed_points_file_exists": "Precomputed Points Exist Already",
        "file_error": "Issue opening PrecomputedPointsFile",
        "precomputed_points_not_found": "Precomputed Lagrange Points File Couldn't not be found",
        "serialization_error": "Serialization Either Failed or Data is Invalid",
    }


class ProofCreationError(_KindedError):
    """A proof could not be created."""

    _MESSAGES = {
        "empty_key_set": "Empty Key Set",
        "expected_one_query_against_root": (
            "Expected to have atleast one query, which will be against the root"
        ),
    }