import pytest

from alphabet_and_permutation import Alphabet, Permutation
from errors import (
    DuplicateRotor,
    InvalidOperation,
    InvalidSymbol,
    MisplacedRotor,
    MissingReflector,
    RotorCountMismatch,
    SettingLengthMismatch,
    SettingSymbolInvalid,
    UnknownRotor,
)
from machine import Machine
from machine_config import build_machine, load_config
from rotor_and_reflector import Rotor

HARRY_PLAIN = ("There once was a boy named Harry destined to be a star His parents "
               "where killed by Voldemort who gave him a lightning scar")
HARRY_CIPHER = ("IJKGGTLVTQIDNWZWVBFSFDHFMTTJIXJXHRWPCYGBYNPUKESK"
                "NHZWNCBTSIAKFNYPAMANXKOSDAVJCELSOFTXZZMSRBYOMYDRZYE")

DOUBLE_STEP = [
    "AAAA", "AAAB", "AAAC", "AABA", "AABB", "AABC", "AACA",
    "ABAB", "ABAC", "ABBA", "ABBB", "ABBC", "ABCA",
    "ACAB", "ACAC", "ACBA", "ACBB", "ACBC", "ACCA",
    "AAAB",
]


# ─────────────────────────────────────────────
#  Stepping
# ─────────────────────────────────────────────

class TestStepping:

    def test_double_step_sequence(self, double_step_machine):
        mach = double_step_machine
        seen = [mach.rotor_settings()]
        for _ in range(len(DOUBLE_STEP) - 1):
            mach.convert("A")
            seen.append(mach.rotor_settings())
        assert seen == DOUBLE_STEP

    def test_double_step_with_real_wiring(self):
        alpha = Alphabet("ABCD")
        rotors = [Rotor.reflector("R1", Permutation("(AC) (BD)", alpha))]
        rotors += [Rotor.moving(f"R{i}", Permutation("(ABCD)", alpha), "C") for i in (2, 3, 4)]
        mach = Machine(alpha, 4, 3, rotors)
        mach.insert_rotors(["R1", "R2", "R3", "R4"])
        mach.set_rotors("AAA")
        mach.convert("A")
        assert mach.rotor_settings() == "AAAB"

    def test_leftmost_rotor_ignores_own_notch(self, double_step_machine):
        double_step_machine.set_rotors("CAA")
        double_step_machine.convert("A")
        assert double_step_machine.rotor_settings() == "ACAB"

    def test_historic_double_step(self, samples):
        # I II III at A D U: the middle rotor steps twice in a row
        mach = build_machine(load_config(samples / "default.conf"))
        mach.insert_rotors(["B", "Beta", "I", "II", "III"])
        mach.set_rotors("AADU")
        seen = []
        for _ in range(3):
            mach.convert("A")
            seen.append(mach.rotor_settings()[2:])
        assert seen == ["ADV", "AEW", "BFX"]

    def test_fixed_rotors_stay_put(self, five_slot_machine):
        five_slot_machine.convert("A" * 60)
        settings = five_slot_machine.rotor_settings()
        assert settings[:2] == "AB"

    def test_no_pawls(self, abc):
        rotors = [Rotor.reflector("R", Permutation("(AB)", abc)), Rotor.fixed("F", Permutation("(BC)", abc))]
        mach = Machine(abc, 2, 0, rotors)
        mach.insert_rotors(["R", "F"])
        mach.set_rotors("B")
        assert mach.convert("AAA") == mach.convert("AAA")
        assert mach.rotor_settings() == "AB"


# ─────────────────────────────────────────────
#  Conversion
# ─────────────────────────────────────────────

class TestConvert:

    def test_regression_fixture(self, five_slot_machine):
        assert five_slot_machine.convert(HARRY_PLAIN) == HARRY_CIPHER

    def test_self_inverse(self, five_slot_machine):
        cipher = five_slot_machine.convert(HARRY_PLAIN)
        five_slot_machine.set_rotors("BBBB")
        assert five_slot_machine.convert(cipher) == HARRY_PLAIN.replace(" ", "").upper()

    def test_length_preserved_without_spaces(self, five_slot_machine):
        assert len(five_slot_machine.convert("ab cd\tef")) == 6

    def test_no_letter_encodes_to_itself(self, five_slot_machine):
        plain = "A" * 200
        assert "A" not in five_slot_machine.convert(plain)

    def test_invalid_symbol_moves_nothing(self, five_slot_machine):
        before = five_slot_machine.rotor_settings()
        with pytest.raises(InvalidSymbol):
            five_slot_machine.convert("HELLO, WORLD")
        assert five_slot_machine.rotor_settings() == before

    def test_plugboard_from_text(self, five_slot_machine):
        five_slot_machine.set_plugboard("(AZ) (PY) (LN)")
        assert five_slot_machine.convert(HARRY_PLAIN) == HARRY_CIPHER

    def test_plugboard_alphabet_must_match(self, five_slot_machine, abc):
        with pytest.raises(ValueError):
            five_slot_machine.set_plugboard(Permutation("(AB)", abc))

    def test_convert_before_insert(self, upper, five_slot_rotors):
        mach = Machine(upper, 5, 3, five_slot_rotors)
        with pytest.raises(InvalidOperation):
            mach.convert("A")


# ─────────────────────────────────────────────
#  Configuration
# ─────────────────────────────────────────────

class TestConfiguration:

    @pytest.fixture
    def mach(self, upper, five_slot_rotors):
        return Machine(upper, 5, 3, five_slot_rotors)

    def test_shape(self, mach):
        assert mach.num_rotors() == 5
        assert mach.num_pawls() == 3
        assert mach.first_moving_slot == 2

    def test_names_are_case_insensitive(self, mach):
        mach.insert_rotors(["r1", "R2", "r3", "R4", "r5"])
        assert [r.name for r in mach.slots] == ["R1", "R2", "R3", "R4", "R5"]
        assert mach.rotor_settings() == "AAAAA"

    def test_unknown_rotor(self, mach):
        with pytest.raises(UnknownRotor):
            mach.insert_rotors(["R1", "R2", "R3", "R4", "R9"])

    def test_duplicate_rotor(self, mach):
        with pytest.raises(DuplicateRotor):
            mach.insert_rotors(["R1", "R2", "R3", "R4", "R4"])

    def test_duplicate_rotor_ignores_case(self, mach):
        with pytest.raises(DuplicateRotor):
            mach.insert_rotors(["R1", "R2", "R3", "r4", "R4"])

    def test_missing_reflector(self, mach):
        with pytest.raises(MissingReflector):
            mach.insert_rotors(["R2", "R1", "R3", "R4", "R5"])

    def test_moving_rotor_without_pawl(self, mach):
        with pytest.raises(MisplacedRotor):
            mach.insert_rotors(["R1", "R3", "R2", "R4", "R5"])

    def test_wrong_rotor_count(self, mach):
        with pytest.raises(RotorCountMismatch):
            mach.insert_rotors(["R1", "R2", "R3", "R4"])

    def test_failed_insert_keeps_previous_rotors(self, mach):
        mach.insert_rotors(["R1", "R2", "R3", "R4", "R5"])
        mach.set_rotors("BBBB")
        with pytest.raises(DuplicateRotor):
            mach.insert_rotors(["R1", "R2", "R3", "R3", "R5"])
        assert mach.rotor_settings() == "ABBBB"

    def test_setting_length(self, five_slot_machine):
        with pytest.raises(SettingLengthMismatch):
            five_slot_machine.set_rotors("AAA")
        with pytest.raises(SettingLengthMismatch):
            five_slot_machine.set_rotors("AAAAA")

    def test_setting_symbol(self, five_slot_machine):
        with pytest.raises(SettingSymbolInvalid):
            five_slot_machine.set_rotors("AA1A")
        assert five_slot_machine.rotor_settings() == "ABBBB"

    def test_set_rotors_before_insert(self, mach):
        with pytest.raises(InvalidOperation):
            mach.set_rotors("AAAA")

    def test_catalogue_names_unique(self, upper, five_slot_rotors):
        extra = Rotor.fixed("r2", Permutation("", upper))
        with pytest.raises(DuplicateRotor):
            Machine(upper, 5, 3, [*five_slot_rotors, extra])

    @pytest.mark.parametrize("num_rotors,pawls", [(1, 0), (3, 3), (3, -1)])
    def test_bad_shape(self, upper, five_slot_rotors, num_rotors, pawls):
        with pytest.raises(ValueError):
            Machine(upper, num_rotors, pawls, five_slot_rotors)

    def test_machines_do_not_share_rotor_state(self, upper, five_slot_rotors):
        one = Machine(upper, 5, 3, five_slot_rotors)
        two = Machine(upper, 5, 3, five_slot_rotors)
        for mach in (one, two):
            mach.insert_rotors(["R1", "R2", "R3", "R4", "R5"])
            mach.set_rotors("BBBB")
            mach.set_plugboard("(AZ) (PY) (LN)")
        assert one.convert(HARRY_PLAIN) == HARRY_CIPHER
        assert two.convert(HARRY_PLAIN) == HARRY_CIPHER
        assert all(r.setting() == 0 for r in five_slot_rotors)
