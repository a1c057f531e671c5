# main.py
from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator
from contextlib import nullcontext
from pathlib import Path
from typing import ContextManager, TextIO

from debug import COMPONENTS, Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from machine_config import (
    MachineConfig,
    apply_setting,
    build_machine,
    is_setting_line,
    load_config,
    parse_setting_line,
)
from suites import SUITES, get_suite
from utilities import group_blocks, nat_key, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


# ────────────────────────────────────────────────────────────────────────
#  1. Loading the machine
# ────────────────────────────────────────────────────────────────────────


def load_machine(source: str) -> tuple[Machine, MachineConfig]:
    """SOURCE is a configuration file or the name of a built-in suite."""
    path = Path(source)
    if path.exists():
        cfg = load_config(path)
    elif source.upper() in SUITES:
        cfg = get_suite(source)
    else:
        raise ConfigError(f"could not open {source}")
    return build_machine(cfg), cfg


def describe_catalogue(cfg: MachineConfig) -> list[str]:
    rows = sorted(cfg.rotors, key=lambda d: (d.kind.value, nat_key(d.name)))
    width = max((len(d.name) for d in rows), default=0)
    lines = [f"alphabet {cfg.alphabet}, {cfg.num_rotors} slots, {cfg.pawls} pawls"]
    for d in rows:
        lines.append(f"  {d.name:<{width}}  {d.tag:<4}  {d.cycles}")
    return lines


# ────────────────────────────────────────────────────────────────────────
#  2. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(
    machine: Machine,
    lines: Iterable[str],
    *,
    block: int = 5,
    drop_invalid: bool = False,
) -> Iterator[str]:
    """Yield one output line per message line.

    ``*`` lines reconfigure the machine and produce no output; blank
    message lines come out blank.
    """
    configured = False
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if is_setting_line(line):
            apply_setting(machine, parse_setting_line(line, machine.num_rotors()))
            configured = True
            continue

        if not configured:
            if not line.strip():
                continue
            raise ConfigError(f"line {lineno}: input does not begin with a setting line")

        if drop_invalid:
            line = preprocess_message(line, machine.alphabet)
        yield group_blocks(machine.convert(line), block)


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages on a rotor machine")
    p.add_argument("config", help=f"Machine configuration file, or a built-in suite ({', '.join(SUITES)}).")
    p.add_argument("input", nargs="?", help="Message file. Default: standard input.")
    p.add_argument("output", nargs="?", help="Where to write results. Default: standard output.")
    p.add_argument("--block", type=int, default=5, metavar="N", help="Output group size, 0 for none. Default: 5")
    p.add_argument("--drop-invalid", action="store_true", help="Discard characters outside the alphabet instead of failing.")
    p.add_argument("--list", action="store_true", help="Print the rotor catalogue and exit.")
    p.add_argument("--debug", action="append", choices=COMPONENTS, default=[], metavar="COMPONENT",
                   help=f"Log one component ({', '.join(COMPONENTS)}); repeatable.")
    p.add_argument("--log-file", metavar="FILE", help="Also write log messages to FILE.")
    return p.parse_args(argv)


def _open_in(name: str | None) -> ContextManager[TextIO]:
    return open(name, encoding="utf-8") if name else nullcontext(sys.stdin)


def _open_out(name: str | None) -> ContextManager[TextIO]:
    return open(name, "w", encoding="utf-8") if name else nullcontext(sys.stdout)


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.log_file:
        Debug(log_to=args.log_file)
    debug.enable(*args.debug)

    try:
        machine, cfg = load_machine(args.config)
        if args.list:
            print("\n".join(describe_catalogue(cfg)))
            return

        with _open_in(args.input) as src, _open_out(args.output) as dst:
            for out in process(machine, src, block=args.block, drop_invalid=args.drop_invalid):
                print(out, file=dst)
    except EnigmaError as e:
        sys.exit(f"Error: {e}")
    except OSError as e:
        sys.exit(f"Error: could not open {e.filename}")


if __name__ == "__main__":
    main()
