# utilities.py
from __future__ import annotations

import re

from alphabet_and_permutation import Alphabet

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_num_re = re.compile(r"^([A-Za-z]+)(\d+)$")
_roman_re = re.compile(r"^[IVX]+$")
_ROMAN = {"I": 1, "V": 5, "X": 10}


def _roman(name: str) -> int:
    total = 0
    for ch, nxt in zip(name, name[1:] + " "):
        value = _ROMAN[ch]
        total += -value if nxt in _ROMAN and _ROMAN[nxt] > value else value
    return total


def nat_key(name: str):
    """Natural‑sort rotor names so I, II, …, VIII, R1, R2, …, R10, Beta."""
    if _roman_re.match(name):
        return (0, "", _roman(name))
    m = _num_re.match(name)
    if m:
        prefix, num = m.groups()
        return (1, prefix, int(num))
    return (2, name, 0)


# ────────────────────────────────────────────────────────────────────────
#  1. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: Alphabet) -> str:
    """Upper‑case and drop everything outside the alphabet (spaces included)."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def group_blocks(text: str, block: int = 5) -> str:
    """``"QVPQSOKOILPU"`` → ``"QVPQS OKOIL PU"``."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


__all__ = [
    "nat_key",
    "preprocess_message",
    "group_blocks",
]
