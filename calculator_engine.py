"""
Motor de la calculadora.

Imita a las calculadoras de bolsillo más sencillas: sin precedencia de
operadores, una sola operación binaria pendiente y la memoria guarda solo
el último valor procesado. Cada método público corresponde a una tecla y
devuelve un ActionResult con el estado y el texto a mostrar.

Contrato de interfaz:
    - cancel, backspace, insert_digit, insert_decimal_point,
      insert_exponent, negate, evaluate, apply_unary, select_binary,
      memory_string -> ActionResult
    - Si el estado no es OK el texto no está definido; la interfaz debe
      mostrar error_message(status).
    - Un error queda fijado hasta llamar a cancel().
"""

from __future__ import annotations

import locale
import logging
from enum import Enum
from typing import NamedTuple

from mpmath import mp

import math_library
from config import (
    BUFFER_SIZE,
    DEFAULT_EXPONENT_LENGTH_LIMIT,
    DEFAULT_MANTISSA_LENGTH_LIMIT,
    DISPLAY_DIGITS,
    FACTORIAL_LIMIT,
    OVERFLOW_LIMIT,
    WORKING_DIGITS,
)
from input_buffer import InputBuffer, InputSyntaxError

logger = logging.getLogger("calculadora.engine")


class Status(Enum):
    OK = "ok"
    OVERFLOW_ERROR = "overflow"
    SYNTAX_ERROR = "syntax"
    MATH_ERROR = "math"


class Operation(Enum):
    """Operación seleccionada: ninguna, recién evaluada o binaria."""

    NONE = "none"
    EVAL = "="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    ROOT = "R"
    COMB = "K"

    @property
    def is_binary(self) -> bool:
        return self not in (Operation.NONE, Operation.EVAL)


class UnaryOperation(Enum):
    FACT = "!"


ERROR_MESSAGES = {
    Status.OVERFLOW_ERROR: "Overflow Error",
    Status.SYNTAX_ERROR: "Syntax Error",
    Status.MATH_ERROR: "Math Error",
}


def error_message(status: Status) -> str:
    """Mensaje fijo que la interfaz muestra para un estado de error."""
    return ERROR_MESSAGES[status]


class ActionResult(NamedTuple):
    """Par (estado, texto) devuelto por cada operación del motor."""

    status: Status
    display: str = ""

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def text(self) -> str:
        """Texto que debe aparecer en pantalla."""
        if self.ok:
            return self.display
        return error_message(self.status)


def _locale_decimal_point() -> str:
    separator = locale.localeconv()["decimal_point"]
    return separator[:1] or "."


class CalculatorEngine:
    """Estado completo de la calculadora y las teclas que lo modifican."""

    def __init__(
        self,
        mantissa_limit: int = DEFAULT_MANTISSA_LENGTH_LIMIT,
        exponent_limit: int = DEFAULT_EXPONENT_LENGTH_LIMIT,
        decimal_separator: str | None = None,
        working_digits: int = WORKING_DIGITS,
    ):
        if decimal_separator is None:
            decimal_separator = _locale_decimal_point()

        self._buffer = InputBuffer(
            separator=decimal_separator,
            mantissa_limit=mantissa_limit,
            exponent_limit=exponent_limit,
            capacity=BUFFER_SIZE,
        )
        self._working_digits = max(DISPLAY_DIGITS + 5, working_digits)
        with mp.workdps(self._working_digits):
            self._overflow_limit = mp.mpf(OVERFLOW_LIMIT)
        self._memory = mp.mpf(0)
        self._selected = Operation.NONE
        self._status = Status.OK

    # ── Propiedades de solo lectura ──────────────────────────────

    @property
    def memory(self):
        return self._memory

    @property
    def buffer(self) -> str:
        return self._buffer.text

    @property
    def selected_operation(self) -> Operation:
        return self._selected

    @property
    def status(self) -> Status:
        return self._status

    @property
    def decimal_separator(self) -> str:
        return self._buffer.separator

    # ── Teclas de edición ────────────────────────────────────────

    def cancel(self) -> ActionResult:
        """Vuelve al estado inicial; es la única forma de salir de un error."""
        self._buffer.clear()
        self._memory = mp.mpf(0)
        self._selected = Operation.NONE
        self._status = Status.OK
        return ActionResult(Status.OK, "0")

    def backspace(self) -> ActionResult:
        if self._status is not Status.OK:
            return ActionResult(self._status)
        self._buffer.backspace()
        return ActionResult(Status.OK, self._buffer.display())

    def insert_digit(self, digit: str) -> ActionResult:
        """Escribe un dígito '0'-'9' en el buffer.

        Si se alcanzó el límite de la mantisa o del exponente la tecla se
        ignora. Empezar a escribir descarta el último resultado evaluado.

        Raises:
            ValueError: si ``digit`` no es un dígito decimal.
        """
        if self._status is not Status.OK:
            return ActionResult(self._status)
        self._buffer.insert_digit(digit)
        return self._edited()

    def insert_triple_zero(self) -> ActionResult:
        result = self.insert_digit("0")
        for _ in range(2):
            result = self.insert_digit("0")
        return result

    def insert_decimal_point(self) -> ActionResult:
        if self._status is not Status.OK:
            return ActionResult(self._status)
        self._buffer.insert_decimal_point()
        return self._edited()

    def insert_exponent(self) -> ActionResult:
        if self._status is not Status.OK:
            return ActionResult(self._status)
        self._buffer.insert_exponent()
        return self._edited()

    def negate(self) -> ActionResult:
        """Cambia el signo de la mantisa, o del exponente si ya hay 'e'."""
        if self._status is not Status.OK:
            return ActionResult(self._status)
        self._buffer.negate()
        return self._edited()

    def _edited(self) -> ActionResult:
        # una nueva entrada abandona el resultado anterior
        if self._selected is Operation.EVAL:
            self._selected = Operation.NONE
        return ActionResult(Status.OK, self._buffer.display())

    # ── Operaciones ──────────────────────────────────────────────

    def select_binary(self, op: Operation) -> ActionResult:
        """Selecciona el operador binario.

        Sin operador previo el buffer pasa a memoria; tras '=' solo cambia
        el operador; con otro operador pendiente se evalúa primero la
        expresión anterior si ya hay segundo operando.
        """
        if not op.is_binary:
            raise ValueError(f"No es una operación binaria: {op}")
        if self._status is not Status.OK:
            return ActionResult(self._status)

        try:
            if self._selected is Operation.NONE:
                self._memory = self._consume()
            elif self._selected is not Operation.EVAL and self._buffer:
                status = self._apply_binary(self._consume())
                if status is not Status.OK:
                    self._selected = op
                    return self._fail(status)
        except InputSyntaxError:
            return self._fail(Status.SYNTAX_ERROR)

        self._selected = op
        return ActionResult(Status.OK, self._format_result(self._memory))

    def evaluate(self) -> ActionResult:
        """Tecla '='.

        Sin operador el buffer pasa a memoria. Con operador pendiente y
        sin segundo operando se usa la memoria como ambos operandos.
        """
        if self._status is not Status.OK:
            return ActionResult(self._status)

        try:
            if not self._selected.is_binary:
                if self._selected is Operation.NONE or self._buffer:
                    self._memory = self._consume()
            else:
                if self._buffer:
                    operand = self._consume()
                else:
                    operand = self._memory
                status = self._apply_binary(operand)
                if status is not Status.OK:
                    return self._fail(status)
        except InputSyntaxError:
            return self._fail(Status.SYNTAX_ERROR)

        self._selected = Operation.EVAL
        return ActionResult(Status.OK, self._format_result(self._memory))

    def apply_unary(self, op: UnaryOperation) -> ActionResult:
        """Aplica una operación unaria y guarda el resultado en memoria.

        El operando es el buffer si no hay operador, la memoria si se
        acaba de evaluar, o el resultado de la expresión pendiente.
        """
        if not isinstance(op, UnaryOperation):
            raise ValueError(f"Operación unaria desconocida: {op}")
        if self._status is not Status.OK:
            return ActionResult(self._status)

        if self._selected is Operation.NONE:
            try:
                self._memory = self._consume()
            except InputSyntaxError:
                return self._fail(Status.SYNTAX_ERROR)
        elif self._selected is Operation.EVAL and not self._buffer:
            pass
        else:
            result = self.evaluate()
            if not result.ok:
                return result

        if op is UnaryOperation.FACT:
            status = self._apply_factorial()
        else:
            raise AssertionError(f"Operación unaria inesperada: {op}")

        if status is not Status.OK:
            return self._fail(status)

        self._selected = Operation.EVAL
        return ActionResult(Status.OK, self._format_result(self._memory))

    def quick_power(self, digit: str) -> ActionResult:
        """Tecla de potencia fija (x², x³...): memoria ^ dígito."""
        return self._quick_binary(Operation.POW, digit)

    def quick_root(self, digit: str) -> ActionResult:
        """Tecla de raíz fija (√, ∛...): raíz dígito-ésima de la memoria."""
        return self._quick_binary(Operation.ROOT, digit)

    def _quick_binary(self, op: Operation, digit: str) -> ActionResult:
        self.select_binary(op)
        self.insert_digit(digit)
        return self.evaluate()

    def memory_string(self) -> ActionResult:
        return ActionResult(self._status, self._format_result(self._memory))

    # ── Evaluación ───────────────────────────────────────────────

    def _consume(self):
        with mp.workdps(self._working_digits):
            return self._buffer.consume()

    def _fail(self, status: Status) -> ActionResult:
        logger.info("Error fijado: %s (operación %s)", status.name, self._selected.name)
        self._status = status
        return ActionResult(status)

    def _apply_binary(self, operand) -> Status:
        """memoria <op> operando; la memoria no cambia si hay error matemático."""
        op = self._selected
        memory = self._memory

        with mp.workdps(self._working_digits):
            if op is Operation.ADD:
                result = math_library.add(memory, operand)
            elif op is Operation.SUB:
                result = math_library.sub(memory, operand)
            elif op is Operation.MUL:
                result = math_library.mul(memory, operand)
            elif op is Operation.DIV:
                if operand == 0:
                    return Status.MATH_ERROR
                result = math_library.divide(memory, operand)
            elif op is Operation.POW:
                if operand < 0 or not mp.isint(operand):
                    return Status.MATH_ERROR
                result = math_library.power(memory, int(operand))
            elif op is Operation.ROOT:
                if operand <= 0 or not mp.isint(operand):
                    return Status.MATH_ERROR
                index = int(operand)
                if memory < 0 and index % 2 == 0:
                    return Status.MATH_ERROR
                result = math_library.root(memory, index)
            elif op is Operation.COMB:
                if memory < 0 or operand < 0:
                    return Status.MATH_ERROR
                result = math_library.comb(
                    int(memory), int(operand), limit=self._overflow_limit
                )
            else:
                raise AssertionError(f"Operación binaria inesperada: {op}")

        logger.debug("%s %s %s = %s", memory, op.value, operand, result)
        self._memory = result
        return self._check_overflow()

    def _apply_factorial(self) -> Status:
        if self._memory < 0:
            return Status.MATH_ERROR
        n = int(self._memory)
        if n > FACTORIAL_LIMIT:
            return Status.OVERFLOW_ERROR

        with mp.workdps(self._working_digits):
            self._memory = math_library.factorial(n)
        logger.debug("%d! = %s", n, self._memory)
        return self._check_overflow()

    def _check_overflow(self) -> Status:
        # a 53 bits un valor apenas mayor que el límite se redondea a él
        with mp.workdps(self._working_digits):
            if abs(self._memory) > self._overflow_limit:
                return Status.OVERFLOW_ERROR
        return Status.OK

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def _format_result(value) -> str:
        if value == 0:
            return "0"

        # mp.nstr redondea a DISPLAY_DIGITS y usa notación científica
        # fuera del rango fijo; "3.0" o "9.0e+99" pierden el ".0"
        text = mp.nstr(value, n=DISPLAY_DIGITS)
        mantissa, marker, exponent = text.partition("e")
        if mantissa.endswith(".0"):
            mantissa = mantissa[:-2]
        return mantissa + marker + exponent
