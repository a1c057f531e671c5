# suites.py
from __future__ import annotations

from typing import Dict

from errors import ConfigError
from machine_config import MachineConfig, RotorDescriptor

Alpha26 = "A-Z"

# ── historic wheels, in cycle notation ───────────────────────────
I    = RotorDescriptor.from_tag("I",    "MQ",  "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)")
II   = RotorDescriptor.from_tag("II",   "ME",  "(FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)")
III  = RotorDescriptor.from_tag("III",  "MV",  "(ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)")
IV   = RotorDescriptor.from_tag("IV",   "MJ",  "(AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)")
V    = RotorDescriptor.from_tag("V",    "MZ",  "(AVOLDRWFIUQ) (BZKSMNHYC) (EGTJPX)")
VI   = RotorDescriptor.from_tag("VI",   "MZM", "(AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)")
VII  = RotorDescriptor.from_tag("VII",  "MZM", "(ANOUPFRIMBZTLWKSVEGCJYDHXQ)")
VIII = RotorDescriptor.from_tag("VIII", "MZM", "(AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)")

# M4 fourth wheels (never rotate)
Beta  = RotorDescriptor.from_tag("Beta",  "N", "(ALBEVFCYODJWUGNMQTZSKPR) (HIX)")
Gamma = RotorDescriptor.from_tag("Gamma", "N", "(AFNIRLBSQWVXGUZDKMTPCOYJHE)")

# reflectors: B and C are the thin M4 ones, UKW-B the wide M3 one
B    = RotorDescriptor.from_tag("B", "R", "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)")
C    = RotorDescriptor.from_tag("C", "R", "(AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)")
UKWB = RotorDescriptor.from_tag("UKW-B", "R", "(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)")

WALZEN = [I, II, III, IV, V, VI, VII, VIII]

SUITES: Dict[str, MachineConfig] = {
    "M3": MachineConfig(Alpha26, 4, 3, [*WALZEN, UKWB]),
    "M4": MachineConfig(Alpha26, 5, 3, [*WALZEN, Beta, Gamma, B, C]),
}


def get_suite(name: str) -> MachineConfig:
    try:
        return SUITES[name.upper()]
    except KeyError:
        raise ConfigError(f"Unknown suite '{name}'. Expected one of {list(SUITES)}") from None
