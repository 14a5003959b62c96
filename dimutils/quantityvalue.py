'''
The quantityvalue module pairs a decimal value with its unit of measure.

Conversion delegates to :func:`dimutils.unit.Unit.convert`, so a
:class:`QuantityValue` follows the same offset and precision rules as plain
unit conversion.
'''

from .unit import _decimal


class QuantityValue:
    '''Decimal value paired with its unit.

    >>> from dimutils.unit import Unit
    >>> str(QuantityValue('1.5', Unit('http://qudt.org/vocab/unit/M', symbol='m')))
    '1.5m'
    '''

    __slots__ = 'value', 'unit'

    def __init__(self, value, unit):
        self.value = _decimal(value)
        self.unit = unit

    def convert(self, to_unit, quantity_kind=None):
        return QuantityValue(self.unit.convert(self.value, to_unit, quantity_kind), to_unit)

    def __eq__(self, other):
        return type(self) == type(other) and self.value == other.value and self.unit == other.unit

    def __hash__(self):
        return hash((self.value, self.unit))

    def __str__(self):
        return f'{self.value}{self.unit}'

    def __repr__(self):
        return f'QuantityValue({str(self.value)!r}, {self.unit!r})'


# vim:sw=4:sts=4:et
