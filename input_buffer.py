"""
Buffer de entrada del número que el usuario está escribiendo.

El texto tiene siempre una de estas formas:

    ""  |  "0"  |  [-]dígitos[sep dígitos][e[-]dígitos]

con a lo sumo un separador decimal y a lo sumo una 'e'. El buffer solo
edita texto; la aritmética vive en el motor.
"""

from __future__ import annotations

from mpmath import mp

from config import (
    BUFFER_SIZE,
    DEFAULT_EXPONENT_LENGTH_LIMIT,
    DEFAULT_MANTISSA_LENGTH_LIMIT,
    EXPONENT_CHAR,
    MINUS_CHAR,
)


class InputSyntaxError(ValueError):
    """El contenido del buffer no se puede leer como número."""


class InputBuffer:
    """Texto editable con los límites de mantisa, exponente y capacidad."""

    def __init__(
        self,
        separator: str = ".",
        mantissa_limit: int = DEFAULT_MANTISSA_LENGTH_LIMIT,
        exponent_limit: int = DEFAULT_EXPONENT_LENGTH_LIMIT,
        capacity: int = BUFFER_SIZE,
    ):
        if len(separator) != 1 or separator.isdigit() or separator in (
            EXPONENT_CHAR,
            MINUS_CHAR,
        ):
            raise ValueError(f"Separador decimal no válido: {separator!r}")
        self._separator = separator
        self._mantissa_limit = mantissa_limit
        self._exponent_limit = exponent_limit
        self._capacity = capacity
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    @property
    def separator(self) -> str:
        return self._separator

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def clear(self):
        self._text = ""

    # ── Primitivas de edición ────────────────────────────────────

    def _insert(self, index: int, char: str) -> bool:
        if len(self._text) >= self._capacity:
            return False
        self._text = self._text[:index] + char + self._text[index:]
        return True

    def _remove(self, index: int):
        self._text = self._text[:index] + self._text[index + 1:]

    def _append(self, char: str) -> bool:
        return self._insert(len(self._text), char)

    # ── Operaciones ──────────────────────────────────────────────

    def insert_digit(self, digit: str):
        """Añade un dígito respetando los límites de mantisa y exponente.

        Si el segmento actual es un cero solitario (con o sin signo y sin
        separador), el dígito lo sustituye en lugar de añadirse detrás.
        """
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Dígito no válido: {digit!r}")

        minus = False
        dpoint = False
        digits = 0
        segment_start = 0
        exponent_mode = False

        for index, char in enumerate(self._text):
            if char == MINUS_CHAR:
                minus = True
            elif char == self._separator:
                dpoint = True
            elif char.isdigit():
                digits += 1
            elif char == EXPONENT_CHAR:
                # mantisa y exponente se cuentan por separado
                exponent_mode = True
                segment_start = index + 1
                minus = False
                dpoint = False
                digits = 0

        first = segment_start + (1 if minus else 0)
        if self._text[first:] == "0" and not dpoint:
            self._text = self._text[:first] + digit
            return

        limit = self._exponent_limit if exponent_mode else self._mantissa_limit
        if digits < limit:
            self._append(digit)

    def insert_decimal_point(self):
        """Añade el separador decimal si la mantisa aún no lo tiene."""
        non_zero_digits = 0
        for char in self._text:
            if char in (self._separator, EXPONENT_CHAR):
                return
            if char in "123456789":
                non_zero_digits += 1

        if non_zero_digits == 0:
            self.insert_digit("0")
        self._append(self._separator)

    def insert_exponent(self):
        """Añade 'e' para empezar a escribir el exponente.

        Un separador sin dígitos detrás se elimina antes; si no hay ningún
        dígito distinto de cero se escribe un '1' delante de la 'e'.
        """
        point = self._text.find(self._separator)
        if point != -1 and point == len(self._text) - 1:
            self.backspace()

        if EXPONENT_CHAR in self._text:
            return

        if not any(char in "123456789" for char in self._text):
            self.insert_digit("1")
        self._append(EXPONENT_CHAR)

    def negate(self):
        """Alterna el '-' de la mantisa o, si ya hay 'e', del exponente."""
        exponent = self._text.find(EXPONENT_CHAR)
        index = 0 if exponent == -1 else exponent + 1

        if self._text[index:index + 1] == MINUS_CHAR:
            self._remove(index)
        else:
            self._insert(index, MINUS_CHAR)

    def backspace(self):
        if self._text:
            self._text = self._text[:-1]

    # ── Lectura ──────────────────────────────────────────────────

    def display(self) -> str:
        """Copia del texto lista para mostrarse; no modifica el buffer."""
        if not self._text:
            return "0"
        if self._text.endswith((EXPONENT_CHAR, MINUS_CHAR)):
            return self._text + "0"
        return self._text

    def consume(self):
        """Lee el buffer como número mpf y lo deja vacío.

        Raises:
            InputSyntaxError: el texto no forma un número válido.
        """
        text = self.display()
        if text.endswith(self._separator):
            text = text[:-1]
        text = text.replace(self._separator, ".")

        try:
            value = mp.mpf(text)
        except (TypeError, ValueError) as exc:
            raise InputSyntaxError(f"Número no válido: {self._text!r}") from exc

        self._text = ""
        return value
