'''
The unit module provides the :class:`Unit` entity together with the rules for
converting values between units and for deciding their compatibility.

Units are created in two phases. The constructor records all relations to
other entities by IRI; :class:`dimutils.registry.Registry` subsequently
resolves them through :func:`Unit.set_prefix`, :func:`Unit.set_scaling_of`,
:func:`Unit.set_factor_units` and :func:`Unit.add_quantity_kind`. After that
the unit graph is treated as immutable.

    >>> from decimal import Decimal
    >>> m = Unit('http://qudt.org/vocab/unit/M', dimension_vector_iri='http://qudt.org/vocab/dimensionvector/A0E0L1I0M0H0T0D0')
    >>> ft = Unit('http://qudt.org/vocab/unit/FT', dimension_vector_iri=m.dimension_vector_iri, conversion_multiplier=Decimal('0.3048'))
    >>> ft.convert(10, m)
    Decimal('3.0480')
'''

from . import _util as util
from .dimensionvector import DimensionVector
from .factor import FactorUnit, FactorUnits, ConversionError, IntegrityError, factor_unit_combinations
from .vocab import NAMESPACES, Labelled
import decimal

UNITLESS = NAMESPACES.unit.make_iri('UNITLESS')
TEMPERATURE_DIFFERENCE = NAMESPACES.quantitykind.make_iri('TemperatureDifference')


def _decimal(value):
    if isinstance(value, float):
        return decimal.Decimal(str(value))
    return decimal.Decimal(value)


def ignores_offset(quantity_kind):
    '''Test if conversions of the given quantity kind are purely multiplicative.

    This is the case for temperature differences and for every kind that has
    temperature difference among its broader kinds, directly or through a
    chain of resolved broader kinds.'''

    seen = set()
    current = [] if quantity_kind is None else [quantity_kind]
    while current:
        if any(qk.iri == TEMPERATURE_DIFFERENCE or TEMPERATURE_DIFFERENCE in qk.broader_quantity_kind_iris for qk in current):
            return True
        seen.update(current)
        current = [broader for qk in current for broader in qk.broader_quantity_kinds if broader not in seen]
    return False


class Unit(Labelled):
    '''Unit of measure identified by its IRI.

    Args
    ----
    iri : :class:`str`
    quantity_kind_iris : sequence of :class:`str`
    dimension_vector_iri : :class:`str`, optional
    conversion_multiplier : :class:`decimal.Decimal`
        Factor converting a value in this unit to the base unit of its
        dimension.
    conversion_offset : :class:`decimal.Decimal`
        Offset added before multiplication, nonzero for units like °C.
    prefix_iri : :class:`str`, optional
    scaling_of_iri : :class:`str`, optional
        IRI of the unit that this unit is a prefixed or scaled version of.
    symbol : :class:`str`, optional
    labels : sequence of labels
    currency_code : :class:`str`, optional
    currency_number : :class:`int`, optional
    unit_of_system_iris : sequence of :class:`str`
    deprecated : :class:`bool`
    dependents : :class:`int`, optional
        Number of units referring to this one; computed by the registry if
        not given.
    factor_unit_iris : sequence of ``(iri, exponent)`` pairs
        Decomposition by IRI, resolved by the registry.
    '''

    def __init__(self, iri, *, quantity_kind_iris=(), dimension_vector_iri=None, conversion_multiplier=1, conversion_offset=0,
                 prefix_iri=None, scaling_of_iri=None, symbol=None, labels=(), currency_code=None, currency_number=None,
                 unit_of_system_iris=(), deprecated=False, dependents=None, factor_unit_iris=()):
        super().__init__(iri, labels)
        self.quantity_kind_iris = list(quantity_kind_iris)
        self.dimension_vector_iri = dimension_vector_iri
        self.conversion_multiplier = _decimal(conversion_multiplier)
        self.conversion_offset = _decimal(conversion_offset)
        self.prefix_iri = prefix_iri
        self.scaling_of_iri = scaling_of_iri
        self.symbol = symbol
        self.currency_code = currency_code
        self.currency_number = currency_number
        self.unit_of_system_iris = list(unit_of_system_iris)
        self.deprecated = deprecated
        self.dependents = dependents
        self.factor_unit_iris = [(firi, util.check_integer(exponent, 'exponent')) for firi, exponent in factor_unit_iris]
        self.prefix = None
        self.scaling_of = None
        self.quantity_kinds = []
        self._factor_units = None

    # second pass wiring

    def _invalidate(self):
        for attr in '_normalized', '_combinations':
            self.__dict__.pop(attr, None)

    def set_prefix(self, prefix):
        if prefix.iri != self.prefix_iri:
            raise IntegrityError(f'prefix {prefix.iri} does not match {self.prefix_iri} of {self.iri}')
        self.prefix = prefix

    def set_scaling_of(self, unit):
        if unit.iri != self.scaling_of_iri:
            raise IntegrityError(f'base unit {unit.iri} does not match {self.scaling_of_iri} of {self.iri}')
        self.scaling_of = unit
        self._invalidate()

    def set_factor_units(self, factor_units):
        if not isinstance(factor_units, FactorUnits):
            factor_units = FactorUnits(factor_units)
        self._factor_units = factor_units
        self._invalidate()

    def add_quantity_kind(self, quantity_kind):
        if quantity_kind not in self.quantity_kinds:
            self.quantity_kinds.append(quantity_kind)
        if quantity_kind.iri not in self.quantity_kind_iris:
            self.quantity_kind_iris.append(quantity_kind.iri)

    # structure

    @property
    def factor_units(self):
        'Own decomposition, or the unit itself as single factor.'

        if self._factor_units is None:
            self._factor_units = FactorUnits.of_unit(self)
        return self._factor_units

    @util.cached_property
    def dimension_vector(self):
        if self.dimension_vector_iri is None:
            return None
        return DimensionVector.parse(self.dimension_vector_iri)

    def has_factor_units(self):
        return bool(self._factor_units) and self._factor_units != FactorUnits.of_unit(self)

    def is_scaled(self):
        return self.scaling_of_iri is not None

    def is_unitless(self):
        return self.iri == UNITLESS

    def has_symbol(self):
        return self.symbol is not None

    def leaf_factor_units(self):
        if not self.has_factor_units():
            return [FactorUnit(self)]
        return [leaf for fu in self.factor_units for leaf in fu.leaf_factor_units()]

    def normalize(self):
        '''Canonical decomposition into leaf units with a scale factor.

        Derived units normalize via their factors, scaled units via their base
        unit, and all other units to themselves. A unit whose factors form a
        ratio of same units, like the steradian, normalizes to itself.'''

        return self._normalized

    @util.cached_property
    def _normalized(self):
        if self.has_factor_units():
            normalized = self.factor_units.normalize()
            if normalized.is_ratio_of_same_units():
                return FactorUnits.of_unit(self)
            return normalized
        if self.scaling_of is not None:
            return self.scaling_of.normalize().scale(self.conversion_multiplier_to(self.scaling_of))
        return FactorUnits.of_unit(self)

    def all_possible_factor_unit_combinations(self):
        return self._combinations

    @util.cached_property
    def _combinations(self):
        if not self.has_factor_units():
            if self.scaling_of is not None:
                return self.scaling_of.all_possible_factor_unit_combinations()
            return [[FactorUnit(self)]]
        combinations = factor_unit_combinations(self.factor_units.factor_units)
        itself = util.multiset([FactorUnit(self)])
        if not any(util.multiset(combination) == itself for combination in combinations):
            combinations.append([FactorUnit(self)])
        return combinations

    def matches(self, selection):
        return self.normalize() == selection.normalize()

    def matches_factor_unit_spec(self, *spec):
        return self.matches(FactorUnits.of_factor_unit_spec(*spec))

    # conversion

    def is_convertible(self, other):
        return self.dimension_vector_iri == other.dimension_vector_iri

    def has_nonzero_conversion_offset(self):
        return self.conversion_offset != 0

    def conversion_offset_differs(self, other):
        return self.has_nonzero_conversion_offset() and other.has_nonzero_conversion_offset() and self.conversion_offset != other.conversion_offset

    def conversion_multiplier_to(self, other):
        '''Factor converting values in this unit to values in ``other``.

        Raises :class:`ConversionError` if the units have different nonzero
        offsets, since the conversion is then not a pure multiplication.'''

        if self == other:
            return decimal.Decimal(1)
        if self.conversion_offset_differs(other):
            raise ConversionError(f'cannot convert from {self} to {other} just by multiplication as their conversion offsets differ')
        with util.decimal_context():
            return self.conversion_multiplier / other.conversion_multiplier

    @util.defaults_from_env
    def convert(self, value, to_unit, quantity_kind=None, precision: int = 34):
        '''Convert a value in this unit to ``to_unit``.

        Args
        ----
        value : :class:`decimal.Decimal`, :class:`int`, :class:`str` or :class:`float`
        to_unit : :class:`Unit`
        quantity_kind : :class:`dimutils.vocab.QuantityKind`, optional
            A temperature difference kind makes the conversion ignore offsets.
        precision : :class:`int`
            Significant digits of the decimal arithmetic, defaults to the
            ``DIMUTILS_PRECISION`` environment variable if set.

        Returns
        -------
        :class:`decimal.Decimal`
        '''

        if value is None:
            raise ValueError('value is required')
        if to_unit is None:
            raise ValueError('to_unit is required')
        value = _decimal(value)
        if self == to_unit or self.is_unitless() or to_unit.is_unitless():
            return value
        if not self.is_convertible(to_unit):
            raise ConversionError(f'not convertible: {self} -> {to_unit}')
        with util.decimal_context(precision):
            if ignores_offset(quantity_kind):
                return value * self.conversion_multiplier / to_unit.conversion_multiplier
            return (value + self.conversion_offset) * self.conversion_multiplier / to_unit.conversion_multiplier - to_unit.conversion_offset

    def _found_in_bases(self, other):
        if not self.is_scaled():
            return self == other
        if self.scaling_of is None:
            raise IntegrityError(f'no base unit found for {self}')
        return self.scaling_of._found_in_bases(other)

    def is_same_scale_as(self, other):
        if self == other:
            return True
        if self.scaling_of_iri is not None and self.scaling_of_iri == other.scaling_of_iri:
            return True
        return self._found_in_bases(other) or other._found_in_bases(self)

    def __str__(self):
        if self.symbol:
            return self.symbol
        if self.prefix is not None and self.prefix.symbol and self.scaling_of is not None and self.scaling_of.symbol:
            return self.prefix.symbol + self.scaling_of.symbol
        return 'unit:' + self.localname


# vim:sw=4:sts=4:et
