"""
Utilidades para placas de camiones comerciales de Arabia Saudita.

Formato: "1234 ABC" (4 digitos + 3 letras latinas).
Funciones puras, sin I/O.
"""
import re

SAUDI_TRUCK_PLATE_REGEX = re.compile(r"^[0-9]{4}\s[A-Z]{3}$")
SAUDI_TRUCK_PLATE_LOOSE_REGEX = re.compile(r"^[0-9]{4}[A-Z]{3}$")

_DIGIT_RUN = re.compile(r"\d+")
_LETTER_RUN = re.compile(r"[A-Z]+")

MAX_PLATE_DIGITS = 4
MAX_PLATE_LETTERS = 3


def is_valid_saudi_truck_plate(plate: str) -> bool:
    """
    Valida una placa con o sin espacio entre digitos y letras.

    >>> is_valid_saudi_truck_plate("7653 tnj")
    True
    >>> is_valid_saudi_truck_plate("12 AB")
    False
    """
    if not plate:
        return False
    cleaned = plate.strip().upper()
    return bool(
        SAUDI_TRUCK_PLATE_REGEX.match(cleaned)
        or SAUDI_TRUCK_PLATE_LOOSE_REGEX.match(cleaned)
    )


def format_saudi_truck_plate(plate: str) -> str:
    """
    Normaliza una placa al formato "1234 ABC".

    Toma el primer bloque de digitos y el primer bloque de letras.
    Si no hay exactamente 4 digitos y 3 letras, devuelve un formato parcial.
    """
    if not plate:
        return ""

    cleaned = re.sub(r"\s+", "", plate).upper()

    digits_match = _DIGIT_RUN.search(cleaned)
    letters_match = _LETTER_RUN.search(cleaned)
    digits = digits_match.group(0) if digits_match else ""
    letters = letters_match.group(0) if letters_match else ""

    if len(digits) == MAX_PLATE_DIGITS and len(letters) == MAX_PLATE_LETTERS:
        return f"{digits} {letters}"

    if digits or letters:
        suffix = f" {letters}" if letters else ""
        return f"{digits}{suffix}".strip()

    return cleaned


def auto_format_plate_input(value: str) -> str:
    """
    Formatea la placa mientras el usuario escribe.

    Limita a 4 digitos y 3 letras e inserta el espacio en cuanto hay
    4 digitos ("7653" -> "7653 ", "7653t" -> "7653 T").
    """
    cleaned = re.sub(r"[^0-9A-Za-z\s]", "", value or "").upper()

    digits = re.sub(r"[^0-9]", "", cleaned)[:MAX_PLATE_DIGITS]
    letters = re.sub(r"[^A-Z]", "", cleaned)[:MAX_PLATE_LETTERS]

    if len(digits) == MAX_PLATE_DIGITS and letters:
        return f"{digits} {letters}"
    if len(digits) == MAX_PLATE_DIGITS:
        return f"{digits} "
    if letters:
        return f"{digits} {letters}".strip()

    return digits
