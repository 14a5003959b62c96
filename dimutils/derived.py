'''
The derived module finds the units that correspond to a product of units
raised to integer powers.

Candidates are the units that share the dimension vector of the requested
product; a candidate matches if its normal form equals that of the request.
Matches are ordered by :class:`Ranking`, which prefers exact factorizations,
current over deprecated units, named units over composed ones and so forth.
With :attr:`SearchMode.BEST_MATCH` only the first of this order is returned.

For example, with a registry ``qudt`` holding the usual units, the call

::

    derived_units_from_spec(qudt, SearchMode.BEST_MATCH, 'KiloGM', 1, 'M', 1, 'SEC', -2)

returns a list holding only the newton.

Units may be passed as :class:`dimutils.unit.Unit` or as a string, which is
interpreted as IRI, local name or label, in that order.
'''

from . import _util as util, assignment
from .factor import FactorUnits, factor_unit_combinations
from .registry import NotFoundError
from .unit import Unit
from functools import cmp_to_key
import enum
import re
import treelog as log


class SearchMode(enum.Enum):
    ALL = 'all'
    BEST_MATCH = 'best_match'

    @classmethod
    def __stringly_loads__(cls, s):
        return cls[s.upper()]

    @classmethod
    def __stringly_dumps__(cls, v):
        return v.name.lower()


def _sign(value):
    return (value > 0) - (value < 0)


class Ranking:
    '''Total order of units matching a requested product of units.

    Units are compared by the following criteria, the first decisive one
    winning:

    1.  factorization equal to the request as given
    2.  not deprecated
    3.  not an alias of the other unit
    4.  local name without hyphen
    5.  number of leaf factors closest to the request, for the denominator,
        the numerator and the whole, in that order
    6.  many dependents, at least ten and more than twice those of the other
    7.  local name among the orderings of the request's local name
    8.  fewer underscore separated tokens in the local name
    9.  factorization equal to the normalized request
    10. local name
    '''

    def __init__(self, target):
        self.target = target

    @util.cached_property
    def _normalized(self):
        return self.target.normalize()

    @util.cached_property
    def _localnames(self):
        return frozenset(self.target.all_localname_possibilities())

    @util.cached_property
    def _counts(self):
        expanded = self.target.expand()
        return len(expanded.denominator()), len(expanded.numerator()), len(expanded)

    @staticmethod
    def _is_alias_of(unit, other):
        return unit.factor_units == FactorUnits.of_unit(other)

    def _count_differences(self, unit):
        expanded = unit.factor_units.expand()
        counts = len(expanded.denominator()), len(expanded.numerator()), len(expanded)
        return tuple(abs(count - target) for count, target in zip(counts, self._counts))

    def compare(self, left, right):
        '''Negative if ``left`` ranks first, positive if ``right`` does.'''

        if left == right:
            return 0
        c = _sign((right.factor_units == self.target) - (left.factor_units == self.target))
        if c:
            return c
        c = _sign(left.deprecated - right.deprecated)
        if c:
            return c
        if self._is_alias_of(left, right):
            return 1
        if self._is_alias_of(right, left):
            return -1
        c = _sign(('-' in left.localname) - ('-' in right.localname))
        if c:
            return c
        for left_difference, right_difference in zip(self._count_differences(left), self._count_differences(right)):
            c = _sign(left_difference - right_difference)
            if c:
                return c
        left_dependents = left.dependents or 0
        right_dependents = right.dependents or 0
        if left_dependents >= 10 and left_dependents > 2 * right_dependents:
            return -1
        if right_dependents >= 10 and right_dependents > 2 * left_dependents:
            return 1
        c = _sign((right.localname in self._localnames) - (left.localname in self._localnames))
        if c:
            return c
        c = _sign(len(left.localname.split('_')) - len(right.localname.split('_')))
        if c:
            return c
        c = _sign((right.factor_units == self._normalized) - (left.factor_units == self._normalized))
        if c:
            return c
        return _sign((left.localname > right.localname) - (left.localname < right.localname))

    def sorted(self, units):
        return sorted(units, key=cmp_to_key(self.compare))


def compare(left, right, target):
    return Ranking(target).compare(left, right)


def rank(units, target):
    return Ranking(target).sorted(units)


def matching_units(registry, selection):
    '''Units whose normal form equals that of ``selection``, in registry order.

    Raises :class:`dimutils.registry.NotFoundError` if no unit shares the
    dimension vector of the selection.'''

    candidates = registry.units_with_dimension_vector(selection.dimension_vector)
    log.debug(f'{len(candidates)} candidates with dimension vector {selection.dimension_vector.localname}')
    normalized = selection.normalize()
    unique, indices = util.unique(unit for unit in candidates if unit.normalize() == normalized)
    return unique


def derived_units(registry, selection, mode=SearchMode.ALL):
    '''Units matching a :class:`dimutils.factor.FactorUnits` selection.

    Args
    ----
    registry : :class:`dimutils.registry.Registry`
    selection : :class:`dimutils.factor.FactorUnits`
    mode : :class:`SearchMode`
        ``ALL`` returns every match ranked, ``BEST_MATCH`` a list holding only
        the best match, or an empty list.

    Returns
    -------
    :class:`list` of :class:`dimutils.unit.Unit`
    '''

    mode = SearchMode(mode)
    with log.context('derived units'):
        matches = rank(matching_units(registry, selection), selection)
        log.debug(f'{len(matches)} units match {selection}')
        if mode == SearchMode.BEST_MATCH and len(matches) > 1:
            log.info(f'best match for {selection}: {matches[0].localname}')
            return matches[:1]
        return matches


def derived_unit(registry, selection):
    '''The best matching unit; raises :class:`NotFoundError` if there is none.'''

    matches = derived_units(registry, selection, SearchMode.BEST_MATCH)
    if not matches:
        raise NotFoundError(f'no unit matches {selection}')
    return matches[0]


def _resolve(registry, unit):
    if isinstance(unit, Unit):
        return unit
    if isinstance(unit, str):
        resolved = registry.unit(unit) or registry.unit_from_localname(unit) or registry.unit_from_label(unit)
        if resolved is None:
            raise NotFoundError(f'unable to find unit for string {unit!r}, interpreted as iri, localname or label')
        return resolved
    raise TypeError(f'expected a Unit or str, got {type(unit).__name__}')


def derived_units_from_spec(registry, mode, *spec):
    '''Units matching alternating unit and integer exponent arguments.'''

    if len(spec) % 2:
        raise ValueError('an even number of arguments is required')
    resolved = [_resolve(registry, item) if i % 2 == 0 else item for i, item in enumerate(spec)]
    return derived_units(registry, FactorUnits.of_factor_unit_spec(*resolved), mode)


def derived_units_from_map(registry, mode, mapping):
    '''Units matching a mapping of unit to integer exponent.'''

    return derived_units_from_spec(registry, mode, *(item for pair in mapping.items() for item in pair))


def derived_units_from_factor_units(registry, mode, *factor_units):
    return derived_units(registry, FactorUnits(factor_units), mode)


# similarity

def _factor_weight(left, right):
    if left == right:
        return 0.
    left_base = left.unit.scaling_of or left.unit
    right_base = right.unit.scaling_of or right.unit
    if left.exponent == right.exponent and left_base == right_base:
        return .6
    if left.unit == right.unit:
        return .8
    if left_base == right_base:
        return .9
    return 1.


def overlap_score(weights):
    '''Overlap of the rows and columns of a weight matrix in [0, 1].

    The optimal assignment defines the overlap as the number of rows minus
    its weight; the score relates it to the union of rows and columns.'''

    nrows, ncols = len(weights), len(weights[0])
    overlap = nrows - assignment.solve(weights).weight
    return overlap / (nrows + ncols - overlap)


def _combination_distance(left, right):
    if len(left) > len(right):
        left, right = right, left
    if not left:
        return 1.
    return 1. - overlap_score([[_factor_weight(l, r) for r in right] for l in left])


def similarity(unit, selection):
    '''Score how closely ``unit`` resembles the factors of ``selection``.

    All factorizations of the unit are matched against all factorizations of
    the selection; a small bonus is added for every requested unit whose local
    name occurs in the unit's local name.'''

    requested = selection.contract_exponents().factor_units
    unit_combinations = unit.all_possible_factor_unit_combinations()
    requested_combinations = factor_unit_combinations(requested)
    smaller, larger = sorted([unit_combinations, requested_combinations], key=len)
    score = overlap_score([[_combination_distance(s, l) for l in larger] for s in smaller]) if smaller else 0.
    occurrences = sum(
        bool(re.search(rf'\b{re.escape(fu.unit.localname)}\b', unit.localname) or re.search(rf'\b{re.escape(fu.unit.localname)}{abs(fu.exponent)}\b', unit.localname))
            for fu in requested)
    return score + occurrences / (len(unit_combinations) + len(requested_combinations) + 1)**2


def closest_units(registry, selection, limit=None):
    '''Units with the dimension vector of ``selection``, most similar first.

    Unlike :func:`derived_units` this does not require the normal forms to be
    equal, which makes it suitable for suggestions when no unit matches.'''

    with log.context('closest units'):
        scored = [(similarity(unit, selection), unit) for unit in registry.units_with_dimension_vector(selection.dimension_vector)]
        scored.sort(key=lambda item: (-item[0], item[1].localname))
        if scored:
            log.debug(f'closest unit to {selection}: {scored[0][1].localname} ({scored[0][0]:.3f})')
        return [unit for score, unit in scored[:limit]]


# vim:sw=4:sts=4:et
