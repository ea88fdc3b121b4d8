"""Parámetros por defecto del motor de la calculadora."""

# ─── BUFFER DE ENTRADA ───────────────────────────────────────────
BUFFER_SIZE = 100                   # caracteres máximos del número en edición
DEFAULT_MANTISSA_LENGTH_LIMIT = 9   # dígitos antes de 'e'
DEFAULT_EXPONENT_LENGTH_LIMIT = 2   # dígitos después de 'e'
EXPONENT_CHAR = "e"
MINUS_CHAR = "-"

# ─── PRECISIÓN ───────────────────────────────────────────────────
WORKING_DIGITS = 30    # dígitos decimales internos (mp.workdps)
DISPLAY_DIGITS = 10    # dígitos significativos mostrados

# ─── LÍMITES ─────────────────────────────────────────────────────
OVERFLOW_LIMIT = "9.999999999e99"
FACTORIAL_LIMIT = 20   # 20! es el mayor factorial entero admitido

# ─── RAÍZ N-ÉSIMA (Newton) ───────────────────────────────────────
ROOT_MAX_ITERATIONS = 100
ROOT_TOLERANCE = "1e-25"   # tolerancia relativa entre iteraciones
