# alphabet_and_permutation.py
from __future__ import annotations

import re
from collections.abc import Iterator

from debug import Debug
from errors import IndexOutOfRange, InvalidSymbol, MalformedPermutation

debug = Debug()
debug.disable("alphabet", "permutation")

RESERVED = set("()*")

_range_re = re.compile(r"^(\S)-(\S)$")
_cycle_re = re.compile(r"\(([^()\s]*)\)")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered set of distinct symbols, indexed 0..N-1."""

    def __init__(self, symbols: str) -> None:
        if not symbols:
            raise ValueError("Alphabet needs at least one symbol")
        bad = {ch for ch in symbols if ch.isspace() or ch in RESERVED}
        if bad:
            raise ValueError(f"Symbols {''.join(sorted(bad))!r} cannot be used in an alphabet")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Alphabet {symbols!r} repeats a symbol")

        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(symbols)
        }

    @classmethod
    def from_range(cls, first: str, last: str) -> "Alphabet":
        """Inclusive range, e.g. ``from_range("A", "Z")``."""
        if ord(first) > ord(last):
            raise ValueError(f"Empty alphabet range {first}-{last}")
        return cls("".join(chr(c) for c in range(ord(first), ord(last) + 1)))

    @classmethod
    def parse(cls, text: str) -> "Alphabet":
        """``"A-Z"`` is a range; anything else lists the symbols in order."""
        text = text.strip()
        m = _range_re.match(text)
        if m and ord(m.group(1)) < ord(m.group(2)):
            return cls.from_range(m.group(1), m.group(2))
        return cls(text)

    def size(self) -> int:
        return len(self.symbols)

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise InvalidSymbol(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise IndexOutOfRange(f"Signal {index} out of range 0–{hi}")
        return self.symbols[index]

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index

    __contains__ = contains

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        if len(self.symbols) > 12:
            return f"<Alphabet {self.symbols[0]}…{self.symbols[-1]} ({len(self.symbols)})>"
        return f"<Alphabet {self.symbols}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A bijection on an alphabet's indices, written in cycle notation.

    ``Permutation("(ABC) (DE)", alpha)`` sends A→B, B→C, C→A, D→E, E→D and
    leaves every other symbol where it is.  Whitespace may separate cycles
    but not appear inside one.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet: Alphabet = alphabet
        self.cycles: list[str] = self._parse(cycles)

        # integer lookup tables
        size = alphabet.size()
        self._fwd: list[int] = list(range(size))
        self._inv: list[int] = list(range(size))
        seen: set[str] = set()

        for cycle in self.cycles:
            for ch in cycle:
                if ch not in alphabet:
                    raise MalformedPermutation(
                        f"Symbol {ch!r} in cycle ({cycle}) is not in the alphabet"
                    )
                if ch in seen:
                    raise MalformedPermutation(f"Symbol {ch!r} appears in more than one place")
                seen.add(ch)

            idx = [alphabet.to_index(ch) for ch in cycle]
            # the last symbol of a cycle wraps back to the first
            for a, b in zip(idx, idx[1:] + idx[:1]):
                self._fwd[a] = b
                self._inv[b] = a

        debug.log("permutation", f"{self} fwd={self._fwd}")

    @staticmethod
    def _parse(text: str) -> list[str]:
        cycles: list[str] = []
        pos = 0
        for m in _cycle_re.finditer(text):
            between = text[pos:m.start()]
            if between.strip():
                raise MalformedPermutation(f"Unexpected {between.strip()!r} in {text!r}")
            if not m.group(1):
                raise MalformedPermutation(f"Empty cycle in {text!r}")
            cycles.append(m.group(1))
            pos = m.end()
        if text[pos:].strip():
            raise MalformedPermutation(f"Unexpected {text[pos:].strip()!r} in {text!r}")
        return cycles

    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        """Return ``p`` modulo the alphabet size, never negative."""
        return p % self.size()

    # ── index mapping ────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._inv[self.wrap(c)]

    # ── symbol mapping ───────────────────────────────────────────
    def permute_symbol(self, p: str) -> str:
        return self.alphabet.to_symbol(self.permute(self.alphabet.to_index(p)))

    def invert_symbol(self, c: str) -> str:
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(c)))

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(self._fwd[i] != i for i in range(self.size()))

    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self.cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self}>"
