from dimutils import _util as util, warnings
from dimutils.testing import TestCase
import os


class unique(TestCase):

    def test_nokey(self):
        unique, indices = util.unique([1, 2, 3, 2])
        self.assertEqual(unique, [1, 2, 3])
        self.assertEqual(indices, [0, 1, 2, 1])

    def test_key(self):
        unique, indices = util.unique([[1, 2], [2, 3], [2, 1]], key=frozenset)
        self.assertEqual(unique, [[1, 2], [2, 3]])
        self.assertEqual(indices, [0, 1, 0])


class gather(TestCase):

    def test(self):
        items = ('z',1), ('a', 2), ('a', 3), ('z', 4), ('b', 5)
        self.assertEqual(list(util.gather(items)), [('z', [1,4]), ('a', [2,3]), ('b', [5])])


class multiset(TestCase):

    def test_order(self):
        self.assertEqual(util.multiset([1, 2, 2]), util.multiset([2, 1, 2]))

    def test_multiplicity(self):
        self.assertNotEqual(util.multiset([1, 2, 2]), util.multiset([1, 1, 2]))
        self.assertNotEqual(util.multiset([1, 2]), util.multiset([1, 2, 2]))


class equal_ignoring_order(TestCase):

    def test_equal(self):
        self.assertTrue(util.equal_ignoring_order([1, 2, 3], [3, 1, 2]))
        self.assertTrue(util.equal_ignoring_order([], []))

    def test_multiplicity(self):
        self.assertFalse(util.equal_ignoring_order([1, 1, 2], [1, 2, 2]))
        self.assertFalse(util.equal_ignoring_order([1, 2], [1, 2, 2]))

    def test_eq(self):
        self.assertTrue(util.equal_ignoring_order(['a', 'B'], ['b', 'A'], eq=lambda l, r: l.lower() == r.lower()))


class check_integer(TestCase):

    def test_valid(self):
        self.assertEqual(util.check_integer(3, 'x'), 3)
        self.assertEqual(util.check_integer(-2, 'x'), -2)

    def test_invalid(self):
        for value in 1.0, True, '1', None:
            with self.subTest(value=value), self.assertRaisesRegex(ValueError, 'x must be an integer'):
                util.check_integer(value, 'x')


class cached_property(TestCase):

    def setUp(self):
        super().setUp()
        ncalls = []
        class Test:
            @util.cached_property
            def value(self):
                'docstring'
                ncalls.append(self)
                return len(ncalls)
        self.Test = Test
        self.ncalls = ncalls

    def test_once(self):
        t = self.Test()
        self.assertEqual(t.value, 1)
        self.assertEqual(t.value, 1)
        self.assertEqual(self.ncalls, [t])

    def test_per_instance(self):
        self.assertEqual(self.Test().value, 1)
        self.assertEqual(self.Test().value, 2)

    def test_class_access(self):
        self.assertIsInstance(self.Test.value, util.cached_property)
        self.assertEqual(self.Test.value.__doc__, 'docstring')


class localname(TestCase):

    def test_slash(self):
        self.assertEqual(util.localname('http://qudt.org/vocab/unit/KiloGM'), 'KiloGM')

    def test_hash(self):
        self.assertEqual(util.localname('http://example.com/units#M'), 'M')


class defaults_from_env(TestCase):

    def setUp(self):
        super().setUp()
        self.old = os.environ.pop('DIMUTILS_TEST_ARG', None)

    def tearDown(self):
        if self.old:
            os.environ['DIMUTILS_TEST_ARG'] = self.old
        else:
            os.environ.pop('DIMUTILS_TEST_ARG', None)
        super().tearDown()

    def check_retvals(self, expect):
        @util.defaults_from_env
        def f(test_arg: int = 1):
            return test_arg
        self.assertEqual(f(-1), -1)
        self.assertEqual(f(), expect)

    def test_no_env(self):
        self.check_retvals(1)

    def test_valid_env(self):
        os.environ['DIMUTILS_TEST_ARG'] = '2'
        self.check_retvals(2)

    def test_invalid_env(self):
        os.environ['DIMUTILS_TEST_ARG'] = 'x'
        with self.assertWarns(warnings.DimutilsWarning):
            self.check_retvals(1)
