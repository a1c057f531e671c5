# machine_config.py
"""Reading machine descriptions and per-message settings.

Two configuration formats describe the same thing:

text::

    A-Z
    5 3
    I     MQ  (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
    Beta  N   (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
    B     R   (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
              (RX) (SZ) (TV)

JSON::

    {"alphabet": "A-Z", "slots": 5, "pawls": 3,
     "rotors": [{"name": "I", "type": "M", "notches": "Q", "cycles": "..."}]}

A message setting line names the rotors (reflector first), gives the
window letters and optionally the plugboard::

    * B Beta III IV I AXLE (HQ) (EX) (IP) (TR) (BY)
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from rotor_and_reflector import Rotor, RotorKind

debug = Debug()
debug.disable("config")

_header_re = re.compile(r"\s*(\S+)\s+(\S+)\s+(\S+)[^\S\n]*(?:\n|$)")
_rotor_re = re.compile(r"\s*([^\s()]+)\s+([^\s()]+)((?:\s*\([^()]*\))*)")


# ────────────────────────────────────────────────────────────────────────
#  0. Records
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class RotorDescriptor:
    name: str
    kind: RotorKind
    cycles: str = ""
    notches: str = ""

    @classmethod
    def from_tag(cls, name: str, tag: str, cycles: str = "") -> "RotorDescriptor":
        """TAG is ``M<notches>``, ``N`` or ``R`` as in the text format."""
        try:
            kind = RotorKind(tag[:1].upper())
        except ValueError:
            raise ConfigError(f"Rotor {name}: unknown type {tag!r}") from None
        notches = tag[1:]
        if kind is not RotorKind.MOVING and notches:
            raise ConfigError(f"Rotor {name}: type {tag!r} cannot carry notches")
        return cls(name, kind, " ".join(cycles.split()), notches)

    @property
    def tag(self) -> str:
        return self.kind.value + self.notches

    def build(self, alphabet: Alphabet) -> Rotor:
        return Rotor(self.name, Permutation(self.cycles, alphabet), self.kind, self.notches)


@dataclass(slots=True)
class MachineConfig:
    alphabet: str
    num_rotors: int
    pawls: int
    rotors: list[RotorDescriptor] = field(default_factory=list)


@dataclass(slots=True)
class MessageSetting:
    rotors: list[str]
    setting: str
    plugboard: str = ""


# ────────────────────────────────────────────────────────────────────────
#  1. Configuration parsing
# ────────────────────────────────────────────────────────────────────────


def _as_count(raw, what: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{what} must be an integer, got {raw!r}") from None


def parse_config(text: str) -> MachineConfig:
    """Parse the whitespace-separated text format."""
    m = _header_re.match(text)
    if not m:
        raise ConfigError("configuration file truncated")
    alphabet, slots, pawls = m.groups()
    cfg = MachineConfig(alphabet, _as_count(slots, "slot count"), _as_count(pawls, "pawl count"))

    pos = m.end()
    while text[pos:].strip():
        r = _rotor_re.match(text, pos)
        if not r:
            snippet = text[pos:].strip().splitlines()[0]
            raise ConfigError(f"bad rotor description near {snippet!r}")
        name, tag, cycles = r.groups()
        cfg.rotors.append(RotorDescriptor.from_tag(name, tag, cycles))
        pos = r.end()

    debug.log("config", f"{len(cfg.rotors)} rotors for alphabet {alphabet}")
    return cfg


def config_from_dict(data: dict) -> MachineConfig:
    """Build a config from the JSON layout."""
    required = {"alphabet", "slots", "pawls", "rotors"}
    missing = required - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    rotors = []
    for entry in data["rotors"]:
        try:
            name, tag = entry["name"], entry["type"]
        except (KeyError, TypeError):
            raise ConfigError(f"Rotor entry {entry!r} needs 'name' and 'type'") from None
        rotors.append(
            RotorDescriptor.from_tag(name, tag + entry.get("notches", ""), entry.get("cycles", ""))
        )

    return MachineConfig(
        str(data["alphabet"]),
        _as_count(data["slots"], "slots"),
        _as_count(data["pawls"], "pawls"),
        rotors,
    )


def config_to_dict(cfg: MachineConfig) -> dict:
    return {
        "alphabet": cfg.alphabet,
        "slots": cfg.num_rotors,
        "pawls": cfg.pawls,
        "rotors": [
            {"name": d.name, "type": d.kind.value, "notches": d.notches, "cycles": d.cycles}
            for d in cfg.rotors
        ],
    }


def load_config(path: str | Path) -> MachineConfig:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not open {path}: {e.strerror}") from None

    if path.suffix.lower() == ".json":
        try:
            return config_from_dict(json.loads(text))
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: {e}") from None
    return parse_config(text)


# ────────────────────────────────────────────────────────────────────────
#  2. Machine construction
# ────────────────────────────────────────────────────────────────────────


def build_machine(cfg: MachineConfig) -> Machine:
    try:
        alphabet = Alphabet.parse(cfg.alphabet)
    except EnigmaError:
        raise
    except ValueError as e:
        raise ConfigError(str(e)) from None

    if cfg.num_rotors < 2:
        raise ConfigError(f"Need at least 2 rotor slots, got {cfg.num_rotors}")
    if not (0 <= cfg.pawls < cfg.num_rotors):
        raise ConfigError(f"Pawl count {cfg.pawls} must be below slot count {cfg.num_rotors}")

    rotors = [d.build(alphabet) for d in cfg.rotors]
    for rotor in rotors:
        if rotor.reflecting() and not rotor.permutation.derangement():
            debug.warn("config", f"Reflector {rotor.name} maps a symbol to itself")

    try:
        return Machine(alphabet, cfg.num_rotors, cfg.pawls, rotors)
    except EnigmaError:
        raise
    except ValueError as e:
        raise ConfigError(str(e)) from None


# ────────────────────────────────────────────────────────────────────────
#  3. Message settings
# ────────────────────────────────────────────────────────────────────────


def is_setting_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def parse_setting_line(line: str, num_rotors: int) -> MessageSetting:
    """Split ``* NAMES... SETTING [CYCLES]`` for a machine with NUM_ROTORS slots."""
    if not is_setting_line(line):
        raise ConfigError(f"Setting line must start with '*': {line!r}")
    tokens = line.lstrip()[1:].split()
    head = []
    for tok in tokens:
        if tok.startswith("("):
            break
        head.append(tok)

    if len(head) != num_rotors + 1:
        raise ConfigError(
            f"Setting line needs {num_rotors} rotor names and a setting: {line.strip()!r}"
        )
    rest = line.lstrip()[1:].split(None, num_rotors + 1)
    plugboard = rest[num_rotors + 1] if len(rest) > num_rotors + 1 else ""
    return MessageSetting(head[:-1], head[-1], plugboard.strip())


def apply_setting(machine: Machine, ms: MessageSetting) -> None:
    """Insert, set and plug; on failure the previous rotors stay in place."""
    plugboard = Permutation(ms.plugboard, machine.alphabet)

    previous = machine.slots
    try:
        machine.insert_rotors(ms.rotors)
        machine.set_rotors(ms.setting)
    except EnigmaError:
        machine.slots = previous
        raise
    machine.set_plugboard(plugboard)
    debug.log("config", f"{ms.rotors} at {ms.setting} plugboard {plugboard}")
