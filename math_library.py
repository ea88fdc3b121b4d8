"""Funciones aritméticas de la calculadora sobre números mpmath."""

from __future__ import annotations

from mpmath import mp

from config import ROOT_MAX_ITERATIONS, ROOT_TOLERANCE


def add(x, y):
    return mp.mpf(x) + y


def sub(x, y):
    return mp.mpf(x) - y


def mul(x, y):
    return mp.mpf(x) * y


def divide(x, y):
    """Cociente decimal x / y.

    Raises:
        ZeroDivisionError: si y es cero.
    """
    return mp.mpf(x) / y


def power(x, y: int):
    """Potencia x**y con exponente natural."""
    if y < 0:
        raise ValueError("La potencia requiere exponente natural")
    return mp.mpf(x) ** int(y)


def root(x, y: int):
    """Raíz y-ésima de x por el método de Newton.

    La estimación inicial sale de exp(ln|x| / y) y se refina con
    k' = ((y - 1) * k + x / k**(y - 1)) / y
    hasta que dos iteraciones difieren menos que la tolerancia relativa
    o se agotan ROOT_MAX_ITERATIONS.
    """
    y = int(y)
    if y <= 0:
        raise ValueError("El índice de la raíz debe ser positivo")

    x = mp.mpf(x)
    if x == 0:
        return mp.mpf(0)
    if x < 0 and y % 2 == 0:
        raise ValueError("Raíz par de un número negativo")

    sign = -1 if x < 0 else 1
    guess = sign * mp.exp(mp.log(abs(x)) / y)
    tolerance = max(mp.mpf(ROOT_TOLERANCE), 16 * mp.eps)

    for _ in range(ROOT_MAX_ITERATIONS):
        following = ((y - 1) * guess + x / guess ** (y - 1)) / y
        if abs(following - guess) <= tolerance * abs(following):
            return following
        guess = following

    return guess


def factorial(x: int):
    """Factorial exacto de un entero no negativo."""
    if x < 0 or int(x) != x:
        raise ValueError("factorial requiere entero no negativo")
    return mp.factorial(int(x))


def comb(x: int, y: int, limit=None):
    """Coeficiente binomial xCy.

    Con ``limit`` el producto se detiene en cuanto supera ese valor; el
    resultado devuelto entonces ya excede el límite pero no es exacto.
    """
    x = int(x)
    y = int(y)
    if x < 0 or y < 0:
        raise ValueError("La combinación requiere enteros no negativos")
    if y > x:
        return mp.mpf(0)

    y = min(y, x - y)
    result = 1
    for i in range(1, y + 1):
        result = result * (x - y + i) // i
        if limit is not None and result > limit:
            break

    return mp.mpf(result)
