"""
Tests unitarios para core/analytics/normalizer.py
"""
from decimal import Decimal

import pytest

from core.analytics.normalizer import normalize_value, normalize_values


class TestNormalizeValue:
    """Forma canónica en texto de cualquier valor de respuesta"""

    def test_strings_pass_through(self):
        assert normalize_value('hola') == 'hola'
        assert normalize_value('') == ''
        assert normalize_value(' 3 ') == ' 3 '

    def test_none_becomes_empty_string(self):
        assert normalize_value(None) == ''

    @pytest.mark.parametrize('raw, expected', [
        (3, '3'),
        (-7, '-7'),
        (3.0, '3'),
        (2.5, '2.5'),
        (Decimal('4.00'), '4'),
        (Decimal('1.25'), '1.25'),
    ])
    def test_numbers(self, raw, expected):
        assert normalize_value(raw) == expected

    def test_integral_float_groups_with_int(self):
        """3 y 3.0 deben agruparse bajo la misma clave"""
        assert normalize_value(3) == normalize_value(3.0)

    def test_booleans(self):
        assert normalize_value(True) == 'true'
        assert normalize_value(False) == 'false'

    def test_non_finite_float_does_not_raise(self):
        assert normalize_value(float('nan')) == 'nan'
        assert normalize_value(float('inf')) == 'inf'

    def test_normalize_values_keeps_order(self):
        assert normalize_values([1, 'a', None, 2.0]) == ['1', 'a', '', '2']
