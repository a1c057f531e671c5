# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Bad configuration or input; never transient, never retried."""


# ── alphabet & permutation ───────────────────────────────────────
class InvalidSymbol(EnigmaError):
    pass


class IndexOutOfRange(EnigmaError, IndexError):
    pass


class MalformedPermutation(EnigmaError):
    pass


# ── rotors ───────────────────────────────────────────────────────
class MalformedRotor(EnigmaError):
    pass


class InvalidOperation(EnigmaError):
    pass


# ── machine configuration ────────────────────────────────────────
class UnknownRotor(EnigmaError):
    pass


class DuplicateRotor(EnigmaError):
    pass


class MissingReflector(EnigmaError):
    pass


class MisplacedRotor(EnigmaError):
    """A rotor sits in a slot its kind cannot occupy."""


class RotorCountMismatch(EnigmaError):
    pass


class SettingLengthMismatch(EnigmaError):
    pass


class SettingSymbolInvalid(EnigmaError):
    pass


# ── files ────────────────────────────────────────────────────────
class ConfigError(EnigmaError):
    """Malformed configuration or message file."""
