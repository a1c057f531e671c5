# rotor_and_reflector.py
from __future__ import annotations

from copy import copy
from enum import Enum

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import InvalidOperation, MalformedRotor

debug = Debug()
debug.disable("rotor")


class RotorKind(Enum):
    """Type tags, spelled the way configuration files spell them."""

    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"


class Rotor:
    """A wired wheel with a rotational offset.

    One class covers all three kinds; behaviour that differs between them
    (stepping, notches, setting a reflector) branches on ``kind``.
    """

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        if kind is RotorKind.MOVING and not notches:
            raise MalformedRotor(f"Moving rotor {name} needs at least one notch")
        if kind is not RotorKind.MOVING and notches:
            raise MalformedRotor(f"Only moving rotors have notches ({name} is {kind.name.lower()})")
        for ch in notches:
            # raises InvalidSymbol for notches outside the alphabet
            permutation.alphabet.to_index(ch)

        self.name = name
        self.permutation = permutation
        self.kind = kind
        self.notches = frozenset(notches)
        self._setting = 0

    # ── constructors per kind ────────────────────────────────────
    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.REFLECTOR)

    def fresh_copy(self) -> "Rotor":
        """Same wiring, private offset reset to 0."""
        dup = copy(self)
        dup._setting = 0
        return dup

    # ── capabilities ─────────────────────────────────────────────
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    # ── setting & stepping ───────────────────────────────────────
    def setting(self) -> int:
        return self._setting

    def setting_symbol(self) -> str:
        return self.alphabet.to_symbol(self._setting)

    def set(self, posn: int) -> None:
        posn = self.permutation.wrap(posn)
        if self.kind is RotorKind.REFLECTOR and posn != 0:
            raise InvalidOperation(f"Reflector {self.name} has only one position")
        self._setting = posn

    def advance(self) -> None:
        if self.kind is RotorKind.REFLECTOR:
            raise InvalidOperation(f"Reflector {self.name} cannot advance")
        if self.kind is RotorKind.MOVING:
            self._setting = self.permutation.wrap(self._setting + 1)
            debug.log("rotor", f"{self.name} -> {self.setting_symbol()}")

    def at_notch(self) -> bool:
        return (
            self.kind is RotorKind.MOVING
            and self.alphabet.to_symbol(self._setting) in self.notches
        )

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, index: int) -> int:
        """Right-hand contact to left-hand contact."""
        wrap = self.permutation.wrap
        return wrap(self.permutation.permute(wrap(index + self._setting)) - self._setting)

    def convert_backward(self, index: int) -> int:
        """Left-hand contact to right-hand contact."""
        wrap = self.permutation.wrap
        return wrap(self.permutation.invert(wrap(index + self._setting)) - self._setting)

    # ── niceties ─────────────────────────────────────────────────
    def __repr__(self) -> str:
        notch = f" notches={''.join(sorted(self.notches))}" if self.notches else ""
        return f"<Rotor {self.name} {self.kind.name.lower()} pos={self._setting}{notch}>"
