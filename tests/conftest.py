import os
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from machine import Machine
from rotor_and_reflector import Rotor

SAMPLES = Path(__file__).resolve().parent.parent / "samples"


@pytest.fixture(autouse=True)
def quiet_debug():
    """Every test starts and ends with all log components off."""
    dbg = Debug()
    dbg.disable(*dbg.status())
    dbg.toggle_global(True)
    yield dbg
    dbg.disable(*dbg.status())
    dbg.toggle_global(True)


@pytest.fixture
def samples() -> Path:
    return SAMPLES


@pytest.fixture
def abc() -> Alphabet:
    return Alphabet("ABC")


@pytest.fixture
def upper() -> Alphabet:
    return Alphabet.from_range("A", "Z")


@pytest.fixture
def double_step_machine(abc):
    """Reflector plus three identity-wired moving rotors, all notched at C."""
    rotors = [Rotor.reflector("R1", Permutation("", abc))]
    rotors += [Rotor.moving(f"R{i}", Permutation("", abc), "C") for i in (2, 3, 4)]
    mach = Machine(abc, 4, 3, rotors)
    mach.insert_rotors(["R1", "R2", "R3", "R4"])
    mach.set_rotors("AAA")
    return mach


@pytest.fixture
def five_slot_rotors(upper):
    return [
        Rotor.reflector("R1", Permutation(
            "(AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)", upper)),
        Rotor.fixed("R2", Permutation("(AFNIRLBSQWVXGUZDKMTPCOYJHE)", upper)),
        Rotor.moving("R3", Permutation("(ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)", upper), "V"),
        Rotor.moving("R4", Permutation("(AVOLDRWFIUQ)(BZKSMNHYC) (EGTJPX)", upper), "Z"),
        Rotor.moving("R5", Permutation(
            "(FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)", upper), "E"),
    ]


@pytest.fixture
def five_slot_machine(upper, five_slot_rotors):
    mach = Machine(upper, 5, 3, five_slot_rotors)
    mach.insert_rotors(["R1", "R2", "R3", "R4", "R5"])
    mach.set_rotors("BBBB")
    mach.set_plugboard(Permutation("(AZ) (PY) (LN)", upper))
    return mach
