# settings_generator.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random, SystemRandom
from typing import List

from errors import ConfigError, EnigmaError
from machine import Machine
from main import load_machine
from rotor_and_reflector import RotorKind

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    max_possible = len(alpha) // 2
    k = min(k, max_possible)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def _names(machine: Machine, kind: RotorKind) -> List[str]:
    return sorted(r.name for r in machine.catalogue.values() if r.kind is kind)


def choose_rotors(machine: Machine, rng: Random | SystemRandom) -> List[str]:
    """Reflector, then fixed rotors, then one moving rotor per pawl."""
    fixed_slots = machine.first_moving_slot - 1
    pools = [
        (_names(machine, RotorKind.REFLECTOR), 1),
        (_names(machine, RotorKind.FIXED), fixed_slots),
        (_names(machine, RotorKind.MOVING), machine.num_pawls()),
    ]
    chosen: List[str] = []
    for pool, need in pools:
        if len(pool) < need:
            raise ConfigError(f"Catalogue has {len(pool)} rotors for {need} slots of one kind")
        chosen += rng.sample(pool, need)
    return chosen


def make_setting_line(machine: Machine, pairs: int, rng: Random | SystemRandom) -> str:
    alpha = machine.alphabet.symbols
    rotors = choose_rotors(machine, rng)
    setting = "".join(rng.choices(alpha, k=machine.num_rotors() - 1))
    plugs = " ".join(f"({p})" for p in choose_pairs(alpha, pairs, rng))
    return " ".join(filter(None, ["*", *rotors, setting, plugs]))


def parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate random message setting lines")
    p.add_argument("config", help="Machine configuration file or built-in suite name")
    p.add_argument("--count", type=int, default=1, help="Number of lines (default: 1)")
    p.add_argument("--pairs", type=int, default=10, help="Plugboard pairs per line (default: 10)")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--outfile", type=Path, help="Destination file (default: stdout)")
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    args = parse_cli(argv)
    rng = build_rng(args.seed)

    try:
        machine, _ = load_machine(args.config)
        lines = [make_setting_line(machine, args.pairs, rng) for _ in range(args.count)]
    except EnigmaError as e:
        sys.exit(f"Error: {e}")

    text = "\n".join(lines) + "\n"
    if args.outfile:
        args.outfile.write_text(text, encoding="utf-8")
        print(f"✅  Wrote {len(lines)} setting line(s) to {args.outfile}")
    else:
        sys.stdout.write(text)


if __name__ == "__main__":
    main()
