from dimutils import derived
from dimutils.derived import SearchMode
from dimutils.factor import FactorUnit, FactorUnits
from dimutils.registry import NotFoundError
from dimutils.testing import TestCase
from dimutils.unit import Unit
from . import vocab


class derived_units(TestCase):

    def setUp(self):
        super().setUp()
        self.qudt = vocab.build()
        self.unit = self.qudt.unit_from_localname

    def spec(self, *spec):
        return FactorUnits.of_factor_unit_spec(*[self.unit(item) if i % 2 == 0 else item for i, item in enumerate(spec)])

    def test_newton(self):
        selection = self.spec('KiloGM', 1, 'M', 1, 'SEC', -2)
        self.assertUnits(derived.derived_units(self.qudt, selection, SearchMode.BEST_MATCH), 'N')
        self.assertUnits(derived.derived_units(self.qudt, selection, SearchMode.ALL), 'N', 'KiloGM-M-PER-SEC2')

    def test_order_independent(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('SEC', -2, 'M', 1, 'KiloGM', 1)), 'N', 'KiloGM-M-PER-SEC2')

    def test_mode_from_string(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('KiloGM', 1, 'M', 1, 'SEC', -2), 'best_match'), 'N')

    def test_pascal(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('N', 1, 'M', -2)), 'PA', 'N-PER-M2')
        self.assertUnits(derived.derived_units(self.qudt, self.spec('KiloGM', 1, 'M', -1, 'SEC', -2), SearchMode.BEST_MATCH), 'PA')

    def test_energy(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('N', 1, 'M', 1)), 'J', 'N-M')

    def test_power(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('J', 1, 'SEC', -1), SearchMode.BEST_MATCH), 'W')
        self.assertUnits(derived.derived_units(self.qudt, self.spec('KiloGM', 1, 'M', 2, 'SEC', -3), SearchMode.BEST_MATCH), 'W')

    def test_force_per_length(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('N', 1, 'M', 1, 'M', -2)), 'N-M-PER-M2', 'PA-M', 'N-PER-M')

    def test_frequency(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('SEC', -1)), 'HZ', 'PER-SEC')

    def test_single_match(self):
        self.assertUnits(derived.derived_units(self.qudt, self.spec('M', 1, 'SEC', -1), SearchMode.BEST_MATCH), 'M-PER-SEC')
        self.assertUnits(derived.derived_units(self.qudt, self.spec('KiloGM', 1, 'M', -3)), 'KiloGM-PER-M3')

    def test_scaled_does_not_match(self):
        self.assertNotIn('KiloN', [unit.localname for unit in derived.derived_units(self.qudt, self.spec('N', 1))])
        self.assertUnits(derived.derived_units(self.qudt, FactorUnits.of_unit(self.unit('N')).scale(1000)), 'KiloN')

    def test_ratio_of_same_units(self):
        self.assertEqual(derived.derived_units(self.qudt, self.spec('M', 2, 'M', -2)), [])
        self.assertUnits(derived.derived_units(self.qudt, self.spec('SR', 1)), 'SR')

    def test_no_units_with_dimension_vector(self):
        with self.assertRaises(NotFoundError):
            derived.derived_units(self.qudt, self.spec('MOL', 1, 'CD', 1))

    def test_derived_unit(self):
        self.assertEqual(derived.derived_unit(self.qudt, self.spec('N', 1, 'M', 1)).localname, 'J')
        with self.assertRaises(NotFoundError):
            derived.derived_unit(self.qudt, self.spec('M', 2, 'M', -2))

    def test_matching_units(self):
        self.assertUnits(derived.matching_units(self.qudt, self.spec('N', 1, 'M', -1)), 'N-PER-M', 'N-M-PER-M2', 'PA-M')


class entry_points(TestCase):

    def setUp(self):
        super().setUp()
        self.qudt = vocab.build()
        self.unit = self.qudt.unit_from_localname

    def test_from_spec_localnames(self):
        self.assertUnits(derived.derived_units_from_spec(self.qudt, SearchMode.BEST_MATCH, 'KiloGM', 1, 'M', 1, 'SEC', -2), 'N')

    def test_from_spec_mixed(self):
        self.assertUnits(derived.derived_units_from_spec(self.qudt, SearchMode.ALL, self.unit('N'), 1, vocab.U('M'), -2), 'PA', 'N-PER-M2')
        self.assertUnits(derived.derived_units_from_spec(self.qudt, SearchMode.BEST_MATCH, 'Newton', 1, 'metre', 1), 'J')

    def test_from_spec_unknown(self):
        with self.assertRaises(NotFoundError):
            derived.derived_units_from_spec(self.qudt, SearchMode.ALL, 'FURLONG', 1)

    def test_from_spec_invalid(self):
        with self.assertRaises(ValueError):
            derived.derived_units_from_spec(self.qudt, SearchMode.ALL, 'M', 1, 'SEC')
        with self.assertRaises(ValueError):
            derived.derived_units_from_spec(self.qudt, SearchMode.ALL, 'M', 1, 'SEC', 0.5)
        with self.assertRaises(TypeError):
            derived.derived_units_from_spec(self.qudt, SearchMode.ALL, 42, 1)

    def test_from_map(self):
        self.assertUnits(derived.derived_units_from_map(self.qudt, SearchMode.BEST_MATCH, {'M': 1, 'KiloGM': 1, 'SEC': -2}), 'N')

    def test_from_factor_units(self):
        self.assertUnits(derived.derived_units_from_factor_units(self.qudt, SearchMode.ALL, FactorUnit(self.unit('N')), FactorUnit(self.unit('M'), -2)), 'PA', 'N-PER-M2')


class ranking(TestCase):

    def setUp(self):
        super().setUp()
        self.qudt = vocab.build()
        self.unit = self.qudt.unit_from_localname

    def fus(self, *spec):
        return FactorUnits([FactorUnit(self.unit(name), exponent) for name, exponent in zip(spec[::2], spec[1::2])])

    def make(self, localname, factor_units, **kwargs):
        unit = Unit(vocab.U(localname), dimension_vector_iri=factor_units.dimension_vector.iri, **kwargs)
        unit.set_factor_units(factor_units)
        return unit

    def assertFirst(self, first, second, target):
        self.assertLess(derived.compare(first, second, target), 0)
        self.assertGreater(derived.compare(second, first, target), 0)
        self.assertEqual(derived.rank([second, first], target), [first, second])

    def test_equal(self):
        self.assertEqual(derived.compare(self.unit('N'), self.unit('N'), self.fus('N', 1)), 0)

    def test_exact_factorization(self):
        target = self.fus('N', 1, 'M', 1, 'M', -2)
        self.assertFirst(self.unit('N-M-PER-M2'), self.unit('N-PER-M'), target)

    def test_deprecated(self):
        target = self.fus('KiloGM', 1, 'M', 1, 'SEC', -2)
        deprecated = self.make('NEWTON', target, deprecated=True)
        self.assertFirst(self.unit('N'), deprecated, target)

    def test_alias(self):
        target = self.fus('KiloGM', 1, 'M', 1, 'SEC', -1, 'SEC', -1)
        alias = self.make('NEWTON', FactorUnits.of_unit(self.unit('N')))
        self.assertFirst(self.unit('N'), alias, target)

    def test_hyphen(self):
        self.assertFirst(self.unit('W'), self.unit('J-PER-SEC'), self.fus('KiloGM', 1, 'M', 2, 'SEC', -3))

    def test_factor_count(self):
        target = self.fus('M', 1, 'SEC', -1)
        close = self.make('P-R', self.fus('M-PER-SEC', 1))
        far = self.make('P-Q', self.fus('M', 1, 'M', 1, 'M', -1, 'SEC', -1))
        self.assertFirst(close, far, target)

    def test_dependents(self):
        target = self.fus('M', 1, 'SEC', -1)
        popular = self.make('Y-B', self.fus('M', 1, 'SEC', -1), dependents=20)
        obscure = self.make('Y-A', self.fus('M', 1, 'SEC', -1), dependents=5)
        self.assertFirst(popular, obscure, target)

    def test_dependents_not_decisive(self):
        target = self.fus('M', 1, 'SEC', -1)
        popular = self.make('Y-B', self.fus('M', 1, 'SEC', -1), dependents=20)
        obscure = self.make('Y-A', self.fus('M', 1, 'SEC', -1), dependents=10)
        self.assertFirst(obscure, popular, target)

    def test_localname_permutation(self):
        target = self.fus('M', 1, 'KiloGM', 1, 'SEC', -1)
        named = self.make('KiloGM-M-PER-SEC', self.fus('KiloGM', 1, 'M', 1, 'SEC', -1))
        other = self.make('AAA-BBB', self.fus('KiloGM', 1, 'M', 1, 'SEC', -1))
        self.assertFirst(named, other, target)

    def test_underscores(self):
        target = self.fus('M', 1, 'SEC', -1)
        plain = self.make('Z-B', self.fus('M', 1, 'SEC', -1))
        tokens = self.make('A-B_X_Y', self.fus('M', 1, 'SEC', -1))
        self.assertFirst(plain, tokens, target)

    def test_normalized_factorization(self):
        target = self.fus('KiloGM', 1, 'M', 1, 'SEC', -1, 'SEC', -1)
        normalized = self.make('B-A', self.fus('GM', 1, 'M', 1, 'SEC', -2).scale(1000))
        other = self.make('A-A', self.fus('KiloGM', 1, 'M', 1, 'SEC', -2))
        self.assertFirst(normalized, other, target)

    def test_localname(self):
        target = self.fus('M', 1, 'SEC', -1)
        self.assertFirst(self.make('A-A', target), self.make('A-B', target), target)


class similarity(TestCase):

    def setUp(self):
        super().setUp()
        self.qudt = vocab.build()
        self.unit = self.qudt.unit_from_localname
        self.selection = FactorUnits.of_factor_unit_spec(self.unit('KiloGM'), 1, self.unit('M'), 1, self.unit('SEC'), -2)

    def test_overlap_score(self):
        self.assertAlmostEqual(derived.overlap_score([[0, 1], [1, 0]]), 1)
        self.assertAlmostEqual(derived.overlap_score([[1, 1], [1, 1]]), 0)
        self.assertAlmostEqual(derived.overlap_score([[0, 1]]), .5)

    def test_similarity(self):
        self.assertAlmostEqual(derived.similarity(self.unit('N'), self.selection), .5)
        self.assertAlmostEqual(derived.similarity(self.unit('KiloGM-M-PER-SEC2'), self.selection), .5 + 3 / 16)

    def test_closest_units(self):
        self.assertUnits(derived.closest_units(self.qudt, self.selection), 'KiloGM-M-PER-SEC2', 'KiloN', 'N')
        self.assertUnits(derived.closest_units(self.qudt, self.selection, limit=1), 'KiloGM-M-PER-SEC2')


class search_mode(TestCase):

    def test_values(self):
        self.assertEqual(SearchMode('all'), SearchMode.ALL)
        self.assertEqual(SearchMode('best_match'), SearchMode.BEST_MATCH)
        with self.assertRaises(ValueError):
            SearchMode('exact')

    def test_stringly(self):
        self.assertEqual(SearchMode.__stringly_loads__('best_match'), SearchMode.BEST_MATCH)
        self.assertEqual(SearchMode.__stringly_dumps__(SearchMode.ALL), 'all')
