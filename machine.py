# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    DuplicateRotor,
    InvalidOperation,
    MisplacedRotor,
    MissingReflector,
    RotorCountMismatch,
    SettingLengthMismatch,
    SettingSymbolInvalid,
    UnknownRotor,
)
from rotor_and_reflector import Rotor

debug = Debug()
debug.disable("stepping", "machine")


class Machine:
    """Reflector in slot 0, then rotors left to right.

    The rightmost ``pawls`` slots rotate; everything between the reflector
    and them stays put.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise ValueError("A machine needs a reflector and at least one rotor")
        if not (0 <= pawls < num_rotors):
            raise ValueError(f"pawls must be in 0..{num_rotors - 1}, got {pawls}")

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls

        self.catalogue: dict[str, Rotor] = {}
        for rotor in all_rotors:
            key = rotor.name.upper()
            if key in self.catalogue:
                raise DuplicateRotor(f"Rotor name {rotor.name!r} used twice in catalogue")
            if rotor.alphabet != alphabet:
                raise ValueError(f"Rotor {rotor.name} is wired for a different alphabet")
            self.catalogue[key] = rotor

        self.slots: list[Rotor | None] = [None] * num_rotors
        self.plugboard = Permutation("", alphabet)

    # ── shape ───────────────────────────────────────────────────

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    @property
    def first_moving_slot(self) -> int:
        return self._num_rotors - self._pawls

    # ── configuration ───────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Bind the catalogue rotors NAMES (NAMES[0] is the reflector).

        Every check runs before any slot changes.  Each slot gets its own
        copy of the catalogue rotor, starting at setting 0.
        """
        if len(names) != self._num_rotors:
            raise RotorCountMismatch(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        chosen: list[Rotor] = []
        seen: set[str] = set()
        for name in names:
            key = name.upper()
            if key not in self.catalogue:
                raise UnknownRotor(f"No rotor named {name!r}")
            if key in seen:
                raise DuplicateRotor(f"Rotor {name!r} repeated")
            seen.add(key)
            chosen.append(self.catalogue[key])

        if not chosen[0].reflecting():
            raise MissingReflector(f"First rotor {chosen[0].name} is not a reflector")
        for slot, rotor in enumerate(chosen[1:], start=1):
            if rotor.reflecting():
                raise MisplacedRotor(f"Reflector {rotor.name} can only sit in slot 0")
            driven = slot >= self.first_moving_slot
            if driven and not rotor.rotates():
                raise MisplacedRotor(f"Slot {slot} needs a moving rotor, {rotor.name} is fixed")
            if not driven and rotor.rotates():
                raise MisplacedRotor(f"Moving rotor {rotor.name} in slot {slot} has no pawl")

        self.slots = [rotor.fresh_copy() for rotor in chosen]
        debug.log("machine", f"slots {[r.name for r in self.slots]}")

    def set_rotors(self, setting: str) -> None:
        """Rotate slots 1.. to SETTING, leftmost rotor first."""
        rotors = self._bound()
        if len(setting) != self._num_rotors - 1:
            raise SettingLengthMismatch(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        bad = [ch for ch in setting if ch not in self.alphabet]
        if bad:
            raise SettingSymbolInvalid(f"Setting {setting!r}: {bad[0]!r} is not in the alphabet")

        for rotor, letter in zip(rotors[1:], setting):
            rotor.set(self.alphabet.to_index(letter))

    def set_plugboard(self, plugboard: Permutation | str) -> None:
        if isinstance(plugboard, str):
            plugboard = Permutation(plugboard, self.alphabet)
        elif plugboard.alphabet != self.alphabet:
            raise ValueError("Plugboard is wired for a different alphabet")
        self.plugboard = plugboard
        debug.log("plugboard", str(plugboard) or "(none)")

    def rotor_settings(self) -> str:
        """Window letters for every slot, reflector first."""
        return "".join(r.setting_symbol() for r in self._bound())

    def _bound(self) -> list[Rotor]:
        if any(r is None for r in self.slots):
            raise InvalidOperation("No rotors inserted")
        return self.slots  # type: ignore[return-value]

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors one key-press.

        Notch states are read for every slot before any rotor moves.  A
        rotor steps when its right neighbour is at a notch, or when it is
        itself at a notch and the rotor to its left also rotates (that
        rotor's pawl drags it along: the double step).
        """
        rotors = self._bound()
        first = self.first_moving_slot
        last = self._num_rotors - 1
        if first > last:
            return

        at_notch = [r.at_notch() for r in rotors]
        advance = [False] * len(rotors)
        advance[last] = True
        for i in range(first, last):
            advance[i] = at_notch[i + 1] or (i > first and at_notch[i])

        for rotor, go in zip(rotors, advance):
            if go:
                rotor.advance()

    # ── encipher one symbol  ────────────────────────────────────

    def convert_index(self, c: int) -> int:
        """Step the machine, then send signal C through it."""
        rotors = self._bound()
        self._step_rotors()
        debug.log("stepping", f"Rotor pos {self.rotor_settings()}")

        c = self.plugboard.permute(c)

        for rotor in reversed(rotors):
            c = rotor.convert_forward(c)

        for rotor in rotors[1:]:
            c = rotor.convert_backward(c)

        return self.plugboard.permute(c)

    def convert(self, msg: str) -> str:
        """Encode or decode MSG; whitespace is dropped, letters upper-cased."""
        message = "".join(msg.split()).upper()
        # every symbol is checked before the first rotor moves
        signals = [self.alphabet.to_index(ch) for ch in message]
        return "".join(
            self.alphabet.to_symbol(self.convert_index(c)) for c in signals
        )

    def __repr__(self) -> str:
        names = [r.name if r else "-" for r in self.slots]
        return f"<Machine slots={names} pawls={self._pawls} plugboard={self.plugboard}>"
