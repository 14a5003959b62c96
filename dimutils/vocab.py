'''
The vocab module provides the supporting vocabulary of the unit graph:
namespaces, language tagged labels, prefixes, quantity kinds and systems of
units.

    >>> NAMESPACES.unit.abbreviate('http://qudt.org/vocab/unit/KiloGM')
    'unit:KiloGM'
    >>> NAMESPACES.quantitykind.expand('qk:Length')
    'http://qudt.org/vocab/quantitykind/Length'
'''

from . import _util as util
import decimal
import types


class Namespace:

    __slots__ = 'base_iri', 'abbreviation_prefix'

    def __init__(self, base_iri, abbreviation_prefix):
        self.base_iri = base_iri
        self.abbreviation_prefix = abbreviation_prefix

    def abbreviate(self, iri):
        if self.is_full_namespace_iri(iri):
            return self.abbreviation_prefix + ':' + iri[len(self.base_iri):]
        return iri

    def expand(self, abbreviated_iri):
        if self.is_abbreviated_namespace_iri(abbreviated_iri):
            return self.base_iri + abbreviated_iri[len(self.abbreviation_prefix)+1:]
        return abbreviated_iri

    def is_abbreviated_namespace_iri(self, iri):
        return iri.startswith(self.abbreviation_prefix + ':')

    def is_full_namespace_iri(self, iri):
        return iri.startswith(self.base_iri)

    def make_iri(self, localname):
        return self.base_iri + localname

    def __repr__(self):
        return f'Namespace({self.base_iri!r}, {self.abbreviation_prefix!r})'


NAMESPACES = types.SimpleNamespace(
    unit=Namespace('http://qudt.org/vocab/unit/', 'unit'),
    quantitykind=Namespace('http://qudt.org/vocab/quantitykind/', 'qk'),
    prefix=Namespace('http://qudt.org/vocab/prefix/', 'prefix'),
    systemofunits=Namespace('http://qudt.org/vocab/sou/', 'sou'),
    dimensionvector=Namespace('http://qudt.org/vocab/dimensionvector/', 'qkdv'),
)


class LangString:
    'Text with an optional language tag.'

    __slots__ = 'text', 'language_tag'

    def __init__(self, text, language_tag=None):
        self.text = text
        self.language_tag = language_tag

    def __eq__(self, other):
        return type(self) == type(other) and self.text == other.text and self.language_tag == other.language_tag

    def __hash__(self):
        return hash((self.text, self.language_tag))

    def __str__(self):
        return self.text + (f'@{self.language_tag}' if self.language_tag else '')

    def __repr__(self):
        return f'LangString({self.text!r}, {self.language_tag!r})'


def _langstrings(labels):
    return [label if isinstance(label, LangString) else LangString(*label) if isinstance(label, tuple) else LangString(label) for label in labels]


class Labelled:
    '''Base class for vocabulary entities identified by IRI and carrying labels.

    Labels may be given as :class:`LangString`, as ``(text, language_tag)``
    tuples, or as plain strings without language tag.'''

    def __init__(self, iri, labels=()):
        self.iri = iri
        self.labels = _langstrings(labels)

    @property
    def localname(self):
        return util.localname(self.iri)

    def add_label(self, label):
        self.labels.extend(_langstrings([label]))

    def has_label(self, label):
        return any(label == l.text for l in self.labels)

    def label_for_language(self, language_tag):
        for label in self.labels:
            if label.language_tag == language_tag:
                return label.text

    def __eq__(self, other):
        return type(self) == type(other) and self.iri == other.iri

    def __hash__(self):
        return hash(self.iri)

    def __repr__(self):
        return f'{type(self).__name__}({self.localname})'


class Prefix(Labelled):
    '''Decimal or binary multiplier such as kilo or kibi.

    Args
    ----
    iri : :class:`str`
    multiplier : :class:`decimal.Decimal`
    symbol : :class:`str`
    ucum_code : :class:`str`, optional
    labels : sequence of labels
    '''

    def __init__(self, iri, multiplier, symbol, ucum_code=None, labels=()):
        super().__init__(iri, labels)
        self.multiplier = decimal.Decimal(multiplier)
        self.symbol = symbol
        self.ucum_code = ucum_code

    def __str__(self):
        return self.symbol or 'prefix:' + self.localname


class QuantityKind(Labelled):
    '''Kind of quantity such as length or temperature difference.

    The broader and applicable unit relations are given by IRI; the broader
    kinds themselves and the narrower kinds are filled in by the registry.'''

    def __init__(self, iri, dimension_vector_iri=None, symbol=None, labels=(), applicable_unit_iris=(), broader_quantity_kind_iris=()):
        super().__init__(iri, labels)
        self.dimension_vector_iri = dimension_vector_iri
        self.symbol = symbol
        self.applicable_unit_iris = list(applicable_unit_iris)
        self.broader_quantity_kind_iris = list(broader_quantity_kind_iris)
        self.broader_quantity_kinds = []
        self.narrower_quantity_kind_iris = []

    def add_applicable_unit_iri(self, iri):
        if iri not in self.applicable_unit_iris:
            self.applicable_unit_iris.append(iri)

    def add_broader_quantity_kind_iri(self, iri):
        if iri not in self.broader_quantity_kind_iris:
            self.broader_quantity_kind_iris.append(iri)

    def add_broader_quantity_kind(self, broader):
        self.add_broader_quantity_kind_iri(broader.iri)
        if broader not in self.broader_quantity_kinds:
            self.broader_quantity_kinds.append(broader)

    def __str__(self):
        return self.symbol or 'quantityKind:' + self.localname


class SystemOfUnits(Labelled):
    '''Named system of units, such as SI, defined by its base units.'''

    GM = NAMESPACES.unit.make_iri('GM')
    KiloGM = NAMESPACES.unit.make_iri('KiloGM')

    def __init__(self, iri, labels=(), abbreviation=None, base_unit_iris=()):
        super().__init__(iri, labels)
        self.abbreviation = abbreviation
        self.base_unit_iris = list(base_unit_iris)

    def has_base_unit(self, unit):
        return unit.iri in self.base_unit_iris

    def allows_unit(self, unit):
        '''Test if a unit belongs to this system.

        A unit is allowed if it is a base unit or declares membership, if it
        scales an allowed unit, or if all of its factors are allowed. Gram is
        allowed in systems that have the kilogram as base unit.'''

        if self.has_base_unit(unit) or self.iri in unit.unit_of_system_iris:
            return True
        if unit.iri == self.GM:
            return self.KiloGM in self.base_unit_iris
        if unit.scaling_of is not None:
            return self.allows_unit(unit.scaling_of)
        if unit.has_factor_units():
            return all(self.allows_unit(fu.unit) for fu in unit.factor_units)
        return False

    def __str__(self):
        return self.abbreviation or 'sou:' + self.localname


# vim:sw=4:sts=4:et
