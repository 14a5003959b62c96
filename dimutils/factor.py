'''
The factor module provides the algebra of units raised to integer powers.

A :class:`FactorUnit` pairs a unit with an integer exponent; a
:class:`FactorUnits` is a product of such factors times a decimal scale
factor. Two simplifications are distinguished: *contraction* merges factors of
the same unit and the same exponent sign, leaving ``m·m⁻¹`` intact, whereas
*reduction* sums all exponents per unit and drops those that cancel.

    >>> from dimutils import factor
    >>> from dimutils.unit import Unit
    >>> m = Unit('http://qudt.org/vocab/unit/M')
    >>> factor.contract_exponents([factor.FactorUnit(m), factor.FactorUnit(m, -1)])
    [FactorUnit(M, 1), FactorUnit(M, -1)]
    >>> factor.reduce_exponents([factor.FactorUnit(m), factor.FactorUnit(m, -1)])
    []
'''

from . import _util as util
from .dimensionvector import DIMENSIONLESS
from functools import reduce
import decimal
import itertools


class ConversionError(Exception):
    pass


class IntegrityError(Exception):
    pass


def contract_exponents(factor_units):
    '''Merge factors of the same unit whose exponents have the same sign.

    The result holds one factor per kind, in order of first occurrence.'''

    return [FactorUnit(fus[0].unit, sum(fu.exponent for fu in fus)) for kind, fus in util.gather((fu.kind, fu) for fu in factor_units)]


def reduce_exponents(factor_units):
    '''Sum the exponents per unit, dropping units whose exponents cancel.'''

    return [FactorUnit(unit, exponent) for unit, exponent in
        ((unit, sum(exponents)) for unit, exponents in util.gather((fu.unit, fu.exponent) for fu in factor_units)) if exponent]


def deduplicate(combinations):
    'Remove combinations that equal an earlier one up to ordering.'

    unique, indices = util.unique(combinations, key=util.multiset)
    return unique


def factor_unit_combinations(factor_units):
    '''All alternative factorizations of a product of factors.

    Every factor contributes each of its own alternatives in turn, the first
    factor cycling fastest. For every combination both the contracted and the
    reduced form are produced, after which duplicates up to ordering are
    removed. An empty product has the single, empty, factorization.'''

    alternatives = [fu.all_possible_factor_unit_combinations() for fu in factor_units]
    results = []
    for choice in itertools.product(*reversed(alternatives)):
        combined = [fu for decomposition in reversed(choice) for fu in decomposition]
        results.append(contract_exponents(combined))
        results.append(reduce_exponents(combined))
    return deduplicate(results)


class FactorUnit:
    '''A unit raised to an integer power.

    Args
    ----
    unit : :class:`dimutils.unit.Unit`
    exponent : :class:`int`
        Must be a true integer; floats and booleans are rejected.
    '''

    __slots__ = 'unit', 'exponent'

    def __init__(self, unit, exponent=1):
        self.unit = unit
        self.exponent = util.check_integer(exponent, 'exponent')

    @property
    def kind(self):
        'Unit IRI combined with the sign of the exponent.'

        return self.unit.iri + ('0' if self.exponent == 0 else '1' if self.exponent > 0 else '-1')

    def pow(self, by):
        return FactorUnit(self.unit, self.exponent * util.check_integer(by, 'by'))

    __pow__ = pow

    def cumulated_exponent(self, by):
        return self.exponent * util.check_integer(by, 'by')

    def is_compatible_with(self, other):
        return self.exponent == other.exponent and self.unit.is_convertible(other.unit)

    def conversion_multiplier_to(self, other):
        if not self.is_compatible_with(other):
            raise ConversionError(f'{self} is not compatible with {other}')
        with util.decimal_context():
            return self.unit.conversion_multiplier_to(other.unit) ** self.exponent

    def leaf_factor_units(self):
        'Recursively expanded factors, exponents multiplied along the way.'

        if not self.unit.has_factor_units():
            return [self]
        return [leaf.pow(self.exponent) for leaf in self.unit.leaf_factor_units()]

    def normalize(self):
        return self.unit.normalize().pow(self.exponent)

    def all_possible_factor_unit_combinations(self):
        return deduplicate([[fu.pow(self.exponent) for fu in combination] for combination in self.unit.all_possible_factor_unit_combinations()])

    def __eq__(self, other):
        return type(self) == type(other) and self.exponent == other.exponent and self.unit == other.unit

    def __hash__(self):
        return hash((self.unit, self.exponent))

    def __str__(self):
        return str(self.unit) + ('' if self.exponent == 1 else f'^{self.exponent}')

    def __repr__(self):
        return f'FactorUnit({self.unit.localname}, {self.exponent})'


class FactorUnits:
    '''Product of factor units and a decimal scale factor.

    Instances are immutable; their normal form and dimension vector are
    computed on first use and retained.

    Args
    ----
    factor_units : iterable of :class:`FactorUnit`
    scale_factor : :class:`decimal.Decimal` or :class:`int`
    '''

    def __init__(self, factor_units=(), scale_factor=1):
        self.factor_units = tuple(factor_units)
        if not all(isinstance(fu, FactorUnit) for fu in self.factor_units):
            raise TypeError('factor_units must be a sequence of FactorUnit')
        self.scale_factor = decimal.Decimal(scale_factor)

    @classmethod
    def of_unit(cls, unit):
        return cls([FactorUnit(unit)])

    @classmethod
    def of_factor_unit_spec(cls, *spec):
        'Create from alternating unit and integer exponent arguments.'

        from .unit import Unit
        if len(spec) % 2:
            raise ValueError('an even number of arguments is required')
        if len(spec) > 14:
            raise ValueError('no more than 14 arguments (7 factor units) are supported')
        factor_units = []
        for i in range(0, len(spec), 2):
            unit, exponent = spec[i:i+2]
            if not isinstance(unit, Unit):
                raise TypeError(f'argument at position {i} is not a Unit: {unit!r}')
            try:
                exponent = util.check_integer(exponent, 'exponent')
            except ValueError:
                raise ValueError(f'argument at position {i+1} is not an integer: {exponent!r}') from None
            factor_units.append(FactorUnit(unit, exponent))
        return cls(factor_units)

    def __len__(self):
        return len(self.factor_units)

    def __iter__(self):
        return iter(self.factor_units)

    def pow(self, power):
        power = util.check_integer(power, 'power')
        with util.decimal_context():
            return FactorUnits([fu.pow(power) for fu in self.factor_units], self.scale_factor ** power)

    __pow__ = pow

    def combine_with(self, other):
        if other is None:
            return self
        with util.decimal_context():
            return FactorUnits(contract_exponents(self.factor_units + other.factor_units), self.scale_factor * other.scale_factor)

    def scale(self, by):
        with util.decimal_context():
            return FactorUnits(self.factor_units, self.scale_factor * by)

    def is_ratio_of_same_units(self):
        'True for two factors of one unit with opposite exponents, like m²/m².'

        return len(self.factor_units) == 2 \
            and self.factor_units[0].unit == self.factor_units[1].unit \
            and self.factor_units[0].exponent == -self.factor_units[1].exponent

    def has_factor_units(self):
        '''Test if this is a genuine decomposition rather than a wrapped unit.

        A single unscaled factor with exponent one only counts if its unit's
        own factorization differs from this one.'''

        if not self.factor_units:
            return False
        if len(self.factor_units) == 1 and self.factor_units[0].exponent == 1 and self.scale_factor == 1:
            return self.factor_units[0].unit.factor_units != self
        return True

    def contract_exponents(self):
        return FactorUnits(contract_exponents(self.factor_units), self.scale_factor)

    def reduce_exponents(self):
        return FactorUnits(reduce_exponents(self.factor_units), self.scale_factor)

    def normalize(self):
        '''Canonical form for structural comparison.

        Every factor is normalized down to its leaf units and the results are
        combined; exponents are then reduced unless the outcome is a ratio of
        same units. The own scale factor is applied last.'''

        return self._normalized

    @util.cached_property
    def _normalized(self):
        if not self.factor_units:
            return self
        normalized = reduce(FactorUnits.combine_with, [fu.normalize() for fu in self.factor_units])
        if not normalized.is_ratio_of_same_units():
            normalized = normalized.reduce_exponents()
        return normalized.scale(self.scale_factor)

    def expand(self):
        'Flatten to leaf factors, used for counting rather than comparison.'

        return FactorUnits([leaf for fu in self.factor_units for leaf in fu.leaf_factor_units()], self.scale_factor)

    def numerator(self):
        return FactorUnits([fu for fu in self.factor_units if fu.exponent > 0], self.scale_factor)

    def denominator(self):
        return FactorUnits([fu.pow(-1) for fu in self.factor_units if fu.exponent < 0])

    @util.cached_property
    def dimension_vector(self):
        dimension_vector = DIMENSIONLESS
        for fu in self.factor_units:
            if fu.unit.dimension_vector is None:
                raise IntegrityError(f'unit {fu.unit.iri} has no dimension vector')
            dimension_vector = dimension_vector.combine(fu.unit.dimension_vector.multiply(fu.exponent))
        return dimension_vector

    def all_possible_factor_unit_combinations(self):
        return factor_unit_combinations(self.factor_units)

    @staticmethod
    def _fragment(fu):
        exponent = abs(fu.exponent)
        return fu.unit.localname + (str(exponent) if exponent > 1 else '')

    @staticmethod
    def _join(numerator, denominator):
        if not denominator:
            return '-'.join(numerator)
        return '-'.join([*numerator, 'PER', *denominator])

    @property
    def localname(self):
        '''Local name in the ``<numerator>-PER-<denominator>`` convention.

        Exponent magnitudes above one are appended to the unit local names.'''

        return self._join([self._fragment(fu) for fu in self.factor_units if fu.exponent > 0],
                          [self._fragment(fu) for fu in self.factor_units if fu.exponent < 0])

    def all_localname_possibilities(self):
        'Local names for all orderings of numerator and of denominator factors.'

        numerator = [self._fragment(fu) for fu in self.factor_units if fu.exponent > 0]
        denominator = [self._fragment(fu) for fu in self.factor_units if fu.exponent < 0]
        unique, indices = util.unique(self._join(n, d) for n in itertools.permutations(numerator) for d in itertools.permutations(denominator))
        return unique

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return self.scale_factor == other.scale_factor and util.equal_ignoring_order(self.factor_units, other.factor_units)

    def __hash__(self):
        return hash((self.scale_factor, util.multiset(self.factor_units)))

    def __str__(self):
        return ('' if self.scale_factor == 1 else f'{self.scale_factor}*') + '[' + ', '.join(map(str, self.factor_units)) + ']'

    def __repr__(self):
        return f'FactorUnits({list(self.factor_units)!r}, {self.scale_factor!r})'


# vim:sw=4:sts=4:et
