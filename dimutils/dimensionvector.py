'''
The dimensionvector module provides the eight slot exponent vector that
captures the physical dimension of a unit, and its canonical identifier.

The first seven slots hold the exponents of amount of substance (A), electric
current (E), length (L), luminous intensity (I), mass (M), temperature (H) and
time (T). The eighth slot (D) is not a dimension but a flag that is one if and
only if all other exponents vanish, marking a ratio of like quantities.

    >>> from dimutils.dimensionvector import DimensionVector
    >>> force = DimensionVector.from_localname('A0E0L1I0M1H0T-2D0')
    >>> force.length, force.time
    (Fraction(1, 1), Fraction(-2, 1))

Vectors combine by adding exponents and scale by multiplication; the ratio
flag is derived anew every time.

    >>> area = DimensionVector.from_localname('A0E0L1I0M0H0T0D0').multiply(2)
    >>> area.localname
    'A0E0L2I0M0H0T0D0'
    >>> area.combine(area.multiply(-1)).is_dimensionless()
    True

Non-integer exponents are written with ``pt`` in place of the decimal point.

    >>> DimensionVector([0, 0, 1.5, 0, 0, 0, 0, 0]).localname
    'A0E0L1pt5I0M0H0T0D0'
'''

import re
import fractions

NAMESPACE = 'http://qudt.org/vocab/dimensionvector/'
DIMENSIONS = 'AELIMHTD'

_re_indicators = re.compile('[AELIMHTD]')
_re_magnitudes = re.compile('-?[0-9]+p?t?[0-9]*')


class DimensionVectorError(ValueError):
    pass


def _format(value):
    if abs(value) < fractions.Fraction(1, 100):
        return '0'
    s = f'{float(value):.3f}'.rstrip('0').rstrip('.')
    return s.replace('.', 'pt')


def _parse(s):
    try:
        value = fractions.Fraction(s.replace('pt', '.'))
    except ValueError:
        raise DimensionVectorError(f'invalid dimension magnitude {s!r}') from None
    return value or fractions.Fraction(0)


class DimensionVector:
    '''Exponents of the seven base dimensions plus the ratio flag.

    Args
    ----
    values : sequence of 8 numbers
        Exponents in the order A, E, L, I, M, H, T, D. Floats are converted via
        their shortest decimal representation.
    '''

    __slots__ = 'values', 'iri', '__weakref__'

    def __init__(self, values, *, iri=None):
        values = tuple(fractions.Fraction(str(v)) if isinstance(v, float) else fractions.Fraction(v) for v in values)
        if len(values) != len(DIMENSIONS):
            raise DimensionVectorError(f'wrong dimensionality, expected {len(DIMENSIONS)}, got {len(values)}')
        self.values = values
        self.iri = iri or NAMESPACE + ''.join(d + _format(v) for d, v in zip(DIMENSIONS, values))

    @classmethod
    def parse(cls, iri):
        '''Create a vector from its identifier, retaining the identifier as given.'''

        if not isinstance(iri, str):
            raise DimensionVectorError(f'expected a str, got {type(iri).__name__}')
        if not iri.startswith(NAMESPACE):
            raise DimensionVectorError(f'not a dimension vector iri: {iri}')
        localname = iri[len(NAMESPACE):]
        magnitudes = _re_indicators.split(localname)
        indicators = _re_magnitudes.split(localname)
        if len(magnitudes) != len(DIMENSIONS) + 1 or len(indicators) != len(DIMENSIONS) + 1:
            raise DimensionVectorError(f'cannot process dimension vector iri {iri}: unexpected number of dimensions')
        if magnitudes[0]:
            raise DimensionVectorError(f'cannot process dimension vector iri {iri}: leading {magnitudes[0]!r}')
        for d, indicator in zip(DIMENSIONS, indicators):
            if indicator != d:
                raise DimensionVectorError(f'expected dimension indicator {d!r}, encountered {indicator!r}')
        return cls([_parse(s) for s in magnitudes[1:]], iri=iri)

    @classmethod
    def from_localname(cls, localname):
        return cls.parse(NAMESPACE + localname)

    @classmethod
    def __stringly_loads__(cls, s):
        return cls.parse(s if s.startswith(NAMESPACE) else NAMESPACE + s)

    @classmethod
    def __stringly_dumps__(cls, v):
        return v.iri

    @property
    def localname(self):
        return self.iri[len(NAMESPACE):]

    @property
    def canonical(self):
        'Equal vector whose identifier is in canonical formatting.'

        return DimensionVector(self.values)

    amount_of_substance = property(lambda self: self.values[0])
    electric_current = property(lambda self: self.values[1])
    length = property(lambda self: self.values[2])
    luminous_intensity = property(lambda self: self.values[3])
    mass = property(lambda self: self.values[4])
    temperature = property(lambda self: self.values[5])
    time = property(lambda self: self.values[6])

    @staticmethod
    def _with_ratio(values):
        return DimensionVector((*values, int(not any(values))))

    def multiply(self, by):
        by = fractions.Fraction(by)
        return self._with_ratio([v * by for v in self.values[:7]])

    def combine(self, other):
        return self._with_ratio([a + b for a, b in zip(self.values[:7], other.values[:7])])

    def is_dimensionless(self):
        return self == DIMENSIONLESS

    def __eq__(self, other):
        return type(self) == type(other) and self.iri == other.iri and self.values == other.values

    def __hash__(self):
        return hash(self.iri)

    def __str__(self):
        return self.localname

    def __repr__(self):
        return f'DimensionVector({self.localname!r})'


DIMENSIONLESS = DimensionVector([0, 0, 0, 0, 0, 0, 0, 1])

# vim:sw=4:sts=4:et
