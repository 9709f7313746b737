"""
Normalización de valores de respuesta.
Convierte cualquier escalar almacenado en la cadena canónica que usan los agregadores.
"""
import math
from decimal import Decimal


def normalize_value(value) -> str:
    """
    Canonical string for a raw answer value. Total: never raises.

    Integral numbers render without a fractional part so ``3`` and ``3.0``
    group under the same key.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return repr(number)
    return str(value)


def normalize_values(values):
    return [normalize_value(v) for v in values]
