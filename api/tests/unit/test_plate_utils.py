"""
Tests unitarios para las utilidades de placas de camiones.
"""
import re

import pytest

from portlink.shared.utils.plate_utils import (
    auto_format_plate_input,
    format_saudi_truck_plate,
    is_valid_saudi_truck_plate,
)


class TestIsValidSaudiTruckPlate:

    @pytest.mark.parametrize("plate", ["7653 TNJ", "7653TNJ", "7653 tnj", "  1234 ABC  "])
    def test_accepts_valid_plates(self, plate):
        assert is_valid_saudi_truck_plate(plate) is True

    @pytest.mark.parametrize("plate", ["", "12 AB", "76534 TNJ", "7653 TNJK", "ABC 7653", "7653-TNJ"])
    def test_rejects_invalid_plates(self, plate):
        assert is_valid_saudi_truck_plate(plate) is False


class TestFormatSaudiTruckPlate:

    def test_inserts_space_and_uppercases(self):
        assert format_saudi_truck_plate("7653tnj") == "7653 TNJ"

    def test_collapses_extra_whitespace(self):
        assert format_saudi_truck_plate(" 76 53  t n j ") == "7653 TNJ"

    def test_partial_plate_is_returned_partially_formatted(self):
        assert format_saudi_truck_plate("765tn") == "765 TN"

    def test_only_digits(self):
        assert format_saudi_truck_plate("12") == "12"

    def test_empty(self):
        assert format_saudi_truck_plate("") == ""


class TestAutoFormatPlateInput:
    """Formato mientras el usuario escribe."""

    def test_adds_trailing_space_after_four_digits(self):
        assert auto_format_plate_input("7653") == "7653 "

    def test_letters_after_digits(self):
        assert auto_format_plate_input("7653t") == "7653 T"

    def test_truncates_to_four_digits_and_three_letters(self):
        assert auto_format_plate_input("765312 tnjx") == "7653 TNJ"

    def test_drops_symbols(self):
        assert auto_format_plate_input("76-53/tn") == "7653 TN"

    def test_incomplete_digits(self):
        assert auto_format_plate_input("76") == "76"


class TestFormatThenValidate:

    CANONICAL = re.compile(r"^\d{4} [A-Z]{3}$")

    @pytest.mark.parametrize("plate", [
        "7653 TNJ",
        "7653TNJ",
        "7653 tnj",
        "7653tnj",
        "  1234 ABC  ",
        "\t0001xyz\n",
        "9999  ZZZ",
    ])
    def test_valid_plates_format_to_canonical_and_stay_valid(self, plate):
        formatted = format_saudi_truck_plate(plate)

        assert self.CANONICAL.match(formatted)
        assert is_valid_saudi_truck_plate(formatted) is True
        assert format_saudi_truck_plate(formatted) == formatted

    @pytest.mark.parametrize("digits,letters", [("0000", "AAA"), ("4821", "KSA"), ("7653", "TNJ")])
    def test_spaced_and_unspaced_variants_agree(self, digits, letters):
        variants = [f"{digits} {letters}", f"{digits}{letters}", f"{digits}{letters.lower()}", f" {digits} {letters} "]

        assert {format_saudi_truck_plate(v) for v in variants} == {f"{digits} {letters}"}
