import pytest

from calculator_engine import CalculatorEngine, Operation, UnaryOperation


@pytest.fixture
def engine():
    return CalculatorEngine(decimal_separator=".")


@pytest.fixture
def press(engine):
    """Pulsa una secuencia de teclas separadas por espacios.

    Los grupos de dígitos se escriben dígito a dígito; devuelve el
    ActionResult de la última tecla.
    """
    keys = {
        "+": lambda: engine.select_binary(Operation.ADD),
        "-": lambda: engine.select_binary(Operation.SUB),
        "*": lambda: engine.select_binary(Operation.MUL),
        "/": lambda: engine.select_binary(Operation.DIV),
        "^": lambda: engine.select_binary(Operation.POW),
        "R": lambda: engine.select_binary(Operation.ROOT),
        "K": lambda: engine.select_binary(Operation.COMB),
        "!": lambda: engine.apply_unary(UnaryOperation.FACT),
        "=": engine.evaluate,
        ".": engine.insert_decimal_point,
        "e": engine.insert_exponent,
        "n": engine.negate,
        "B": engine.backspace,
        "C": engine.cancel,
    }

    def _press(sequence: str):
        result = None
        for key in sequence.split():
            if key.isdigit():
                for digit in key:
                    result = engine.insert_digit(digit)
            else:
                result = keys[key]()
        return result

    return _press
