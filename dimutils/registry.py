'''
The registry module holds the in-memory unit graph and its indices.

A :class:`Registry` is filled with units, prefixes, quantity kinds and systems
of units that refer to each other by IRI, in any order. A single call to
:func:`Registry.wire` then resolves all references, computes dependent counts
and indexes the units by dimension vector, after which the registry is frozen.

    >>> from dimutils.unit import Unit
    >>> registry = Registry()
    >>> m = registry.add_unit(Unit('http://qudt.org/vocab/unit/M', labels=['Meter'],
    ...     dimension_vector_iri='http://qudt.org/vocab/dimensionvector/A0E0L1I0M0H0T0D0'))
    >>> registry.unit_from_label('METER') is m
    True

Lookups come in two flavours: the plain variant returns None when nothing is
found, the ``_required`` variant raises :class:`NotFoundError`.
'''

from . import _util as util, warnings
from .dimensionvector import DimensionVector
from .factor import FactorUnit, contract_exponents, reduce_exponents
from .quantityvalue import QuantityValue
from .unit import Unit
from .vocab import NAMESPACES, Prefix
import collections
import treelog as log


class RegistryError(Exception):
    pass


class NotFoundError(LookupError):
    pass


def _label_key(term):
    return term.replace('_', ' ').upper()


def _find_by_label(items, label, extra=lambda item: ()):
    key = _label_key(label)
    for item in items:
        if any(_label_key(l.text) == key for l in item.labels) or any(_label_key(s) == key for s in extra(item) if s):
            return item


def _required(item, what, name):
    if item is None:
        raise NotFoundError(f'{what} {name} not found')
    return item


class Registry:
    '''In-memory collection of units and their vocabulary.'''

    def __init__(self):
        self.units = {}
        self.prefixes = {}
        self.quantity_kinds = {}
        self.systems_of_units = {}
        self._units_by_dimension_vector = None

    @property
    def wired(self):
        return self._units_by_dimension_vector is not None

    def _add(self, mapping, item, what):
        if self.wired:
            raise RegistryError(f'cannot add {what} {item.iri} to a wired registry')
        if item.iri in mapping:
            raise RegistryError(f'duplicate {what} {item.iri}')
        mapping[item.iri] = item
        return item

    def add_unit(self, unit):
        return self._add(self.units, unit, 'unit')

    def add_prefix(self, prefix):
        return self._add(self.prefixes, prefix, 'prefix')

    def add_quantity_kind(self, quantity_kind):
        return self._add(self.quantity_kinds, quantity_kind, 'quantity kind')

    def add_system_of_units(self, system_of_units):
        return self._add(self.systems_of_units, system_of_units, 'system of units')

    def wire(self):
        '''Resolve all references by IRI and build the dimension vector index.

        Raises :class:`NotFoundError` for dangling references. Units without a
        dimension vector are reported by a warning and left out of the index.'''

        if self.wired:
            raise RegistryError('registry is already wired')
        with log.context('wire'):
            for unit in self.units.values():
                if unit.prefix_iri is not None:
                    unit.set_prefix(self.prefix_required(unit.prefix_iri))
                if unit.scaling_of_iri is not None:
                    unit.set_scaling_of(self.unit_required(unit.scaling_of_iri))
                if unit.factor_unit_iris:
                    unit.set_factor_units([FactorUnit(self.unit_required(iri), exponent) for iri, exponent in unit.factor_unit_iris])
                for iri in list(unit.quantity_kind_iris):
                    unit.add_quantity_kind(self.quantity_kind_required(iri))
            for quantity_kind in self.quantity_kinds.values():
                for iri in quantity_kind.applicable_unit_iris:
                    if iri in self.units:
                        self.units[iri].add_quantity_kind(quantity_kind)
                for iri in quantity_kind.broader_quantity_kind_iris:
                    broader = self.quantity_kind_required(iri)
                    quantity_kind.add_broader_quantity_kind(broader)
                    if quantity_kind.iri not in broader.narrower_quantity_kind_iris:
                        broader.narrower_quantity_kind_iris.append(quantity_kind.iri)
            dependents = collections.Counter()
            for unit in self.units.values():
                referenced = {fu.unit for fu in unit.factor_units} if unit.has_factor_units() else set()
                if unit.scaling_of is not None:
                    referenced.add(unit.scaling_of)
                referenced.discard(unit)
                dependents.update(referenced)
            for unit in self.units.values():
                if unit.dependents is None:
                    unit.dependents = dependents[unit]
            indexed = []
            for unit in self.units.values():
                if unit.dimension_vector is None:
                    warnings.warn(f'unit {unit.iri} has no dimension vector', warnings.DimutilsIntegrityWarning)
                else:
                    indexed.append((unit.dimension_vector.canonical.iri, unit))
            self._units_by_dimension_vector = {iri: tuple(units) for iri, units in util.gather(indexed)}
            log.info(f'wired {len(self.units)} units, {len(self.prefixes)} prefixes, {len(self.quantity_kinds)} quantity kinds and {len(self.systems_of_units)} systems of units')
            log.debug(f'indexed units by {len(self._units_by_dimension_vector)} dimension vectors')

    def units_with_dimension_vector(self, dimension_vector):
        '''Units sharing the given dimension vector or dimension vector IRI.'''

        if not self.wired:
            raise RegistryError('registry is not wired')
        if isinstance(dimension_vector, str):
            dimension_vector = DimensionVector.parse(dimension_vector)
        try:
            return self._units_by_dimension_vector[dimension_vector.canonical.iri]
        except KeyError:
            raise NotFoundError(f'no units with dimension vector {dimension_vector.localname}') from None

    # units

    def unit(self, iri):
        return self.units.get(iri)

    def unit_required(self, iri):
        return _required(self.unit(iri), 'unit', iri)

    def unit_from_localname(self, localname):
        return self.unit(NAMESPACES.unit.make_iri(localname))

    def unit_from_localname_required(self, localname):
        return _required(self.unit_from_localname(localname), 'unit', localname)

    def unit_from_label(self, label):
        '''First unit with a label or currency code equal to ``label``.

        The comparison ignores case and treats underscores as spaces.'''

        return _find_by_label(self.units.values(), label, lambda unit: (unit.currency_code,))

    def unit_from_label_required(self, label):
        return _required(self.unit_from_label(label), 'unit with label', label)

    def all_units(self):
        return list(self.units.values())

    # prefixes

    def prefix(self, iri):
        return self.prefixes.get(iri)

    def prefix_required(self, iri):
        return _required(self.prefix(iri), 'prefix', iri)

    def prefix_from_localname(self, localname):
        return self.prefix(NAMESPACES.prefix.make_iri(localname))

    def prefix_from_localname_required(self, localname):
        return _required(self.prefix_from_localname(localname), 'prefix', localname)

    def prefix_from_label(self, label):
        return _find_by_label(self.prefixes.values(), label)

    def prefix_from_label_required(self, label):
        return _required(self.prefix_from_label(label), 'prefix with label', label)

    def all_prefixes(self):
        return list(self.prefixes.values())

    # quantity kinds

    def quantity_kind(self, iri):
        return self.quantity_kinds.get(iri)

    def quantity_kind_required(self, iri):
        return _required(self.quantity_kind(iri), 'quantity kind', iri)

    def quantity_kind_from_localname(self, localname):
        return self.quantity_kind(NAMESPACES.quantitykind.make_iri(localname))

    def quantity_kind_from_localname_required(self, localname):
        return _required(self.quantity_kind_from_localname(localname), 'quantity kind', localname)

    def quantity_kind_from_label(self, label):
        return _find_by_label(self.quantity_kinds.values(), label)

    def quantity_kinds_of_unit(self, unit):
        return [self.quantity_kind_required(iri) for iri in unit.quantity_kind_iris]

    def quantity_kinds_broad(self, unit):
        '''Quantity kinds of a unit followed by all their broader kinds.'''

        result = self.quantity_kinds_of_unit(unit)
        current = list(result)
        while current:
            current = [self.quantity_kind_required(iri) for quantity_kind in current for iri in quantity_kind.broader_quantity_kind_iris]
            current = [quantity_kind for quantity_kind in current if quantity_kind not in result]
            result.extend(util.unique(current)[0])
        return result

    def narrower_quantity_kinds(self, quantity_kind):
        return [self.quantity_kind_required(iri) for iri in quantity_kind.narrower_quantity_kind_iris]

    def all_quantity_kinds(self):
        return list(self.quantity_kinds.values())

    # systems of units

    def system_of_units(self, iri):
        return self.systems_of_units.get(iri)

    def system_of_units_required(self, iri):
        return _required(self.system_of_units(iri), 'system of units', iri)

    def system_of_units_from_localname(self, localname):
        return self.system_of_units(NAMESPACES.systemofunits.make_iri(localname))

    def system_of_units_from_localname_required(self, localname):
        return _required(self.system_of_units_from_localname(localname), 'system of units', localname)

    def system_of_units_from_label(self, label):
        return _find_by_label(self.systems_of_units.values(), label, lambda system: (system.abbreviation,))

    def system_of_units_from_label_required(self, label):
        return _required(self.system_of_units_from_label(label), 'system of units with label', label)

    def all_systems_of_units(self):
        return list(self.systems_of_units.values())

    def all_units_of_system(self, system):
        return [unit for unit in self.units.values() if system.allows_unit(unit)]

    # scaling

    def scale(self, prefix, base_unit):
        '''The unit obtained by applying ``prefix`` to ``base_unit``.

        Both arguments may be given as entity or IRI.'''

        if not isinstance(prefix, Prefix):
            prefix = self.prefix_required(prefix)
        if not isinstance(base_unit, Unit):
            base_unit = self.unit_required(base_unit)
        for unit in self.units.values():
            if unit.prefix == prefix and unit.scaling_of == base_unit:
                return unit
        raise NotFoundError(f'no scaled unit found with base unit {base_unit} and prefix {prefix}')

    def scale_unit_from_labels(self, prefix_label, base_unit_label):
        return self.scale(self.prefix_from_label_required(prefix_label), self.unit_from_label_required(base_unit_label))

    def unscale(self, unit):
        if unit.scaling_of_iri is None:
            return unit
        return self.unit_required(unit.scaling_of_iri)

    def unscale_factor_units(self, factor_units):
        return [FactorUnit(self.unscale(fu.unit), fu.exponent) for fu in factor_units]

    def scale_to_base_unit(self, unit):
        '''Return the base unit and the factor converting ``unit`` values to it.'''

        if unit.scaling_of is None:
            return unit, unit.conversion_multiplier_to(unit)
        return unit.scaling_of, unit.conversion_multiplier_to(unit.scaling_of)

    # factor units

    def factor_units(self, unit):
        'Leaf factors of a unit, contracted.'

        return contract_exponents(unit.leaf_factor_units())

    def contract_factor_units(self, factor_units):
        return contract_exponents(factor_units)

    def reduce_factor_units(self, factor_units):
        return reduce_exponents(factor_units)

    def simplify_factor_units(self, factor_units):
        warnings.deprecation('simplify_factor_units is deprecated, use contract_factor_units instead')
        return contract_exponents(factor_units)

    # conversion

    def _unit(self, unit):
        return unit if isinstance(unit, Unit) else self.unit_required(unit)

    def quantity_value(self, value, unit):
        return QuantityValue(value, self._unit(unit))

    def convert(self, value, from_unit, to_unit, quantity_kind=None):
        '''Convert ``value`` between units given as entity or IRI.

        The optional quantity kind may be given as entity or IRI as well.'''

        if from_unit is None or to_unit is None:
            raise ValueError('from_unit and to_unit are required')
        if isinstance(quantity_kind, str):
            quantity_kind = self.quantity_kind_required(quantity_kind)
        return self._unit(from_unit).convert(value, self._unit(to_unit), quantity_kind)

    def convert_quantity_value(self, quantity_value, to_unit, quantity_kind=None):
        if quantity_value is None or to_unit is None:
            raise ValueError('quantity_value and to_unit are required')
        if isinstance(quantity_kind, str):
            quantity_kind = self.quantity_kind_required(quantity_kind)
        return quantity_value.convert(self._unit(to_unit), quantity_kind)

    def is_convertible(self, from_unit, to_unit):
        return self._unit(from_unit).is_convertible(self._unit(to_unit))


# vim:sw=4:sts=4:et
