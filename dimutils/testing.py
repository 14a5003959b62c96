'''
Extensions of the :mod:`unittest` module.
'''

import unittest
import decimal
import treelog
import warnings as _builtin_warnings
import logging
from dimutils import warnings


class PrintHandler(logging.Handler):
    'similar to StreamHandler except using always the current sys.stdout'

    def emit(self, record):
        print(record.msg)


class TestCase(unittest.TestCase):
    '''A class whose instances are single test cases.

    All :class:`dimutils.warnings.DimutilsWarning` are turned into an
    exception by default. Use

    ::

      def test(self):
        with self.assertWarns(...):
          ...

    to assert expected warnings.
    '''

    maxDiff = None  # prevent assertEqual from shortening the diff error message

    def enter_context(self, ctx):
        retval = ctx.__enter__()
        self.addCleanup(ctx.__exit__, None, None, None)
        return retval

    def setUp(self):
        super().setUp()
        print_handler = PrintHandler()
        dimutils_logger = logging.getLogger('dimutils')
        dimutils_logger.setLevel('INFO')  # handle events of level INFO and up
        dimutils_logger.addHandler(print_handler)
        self.addCleanup(dimutils_logger.removeHandler, print_handler)
        self.enter_context(treelog.set(treelog.LoggingLog('dimutils')))
        self.enter_context(_builtin_warnings.catch_warnings())
        _builtin_warnings.simplefilter('error', warnings.DimutilsWarning)

    def assertDecimalEqual(self, actual, desired, places=None):
        '''Assert equality of decimal values, optionally after rounding.

        Both arguments are converted to :class:`decimal.Decimal`; strings are
        accepted for ``desired`` to avoid binary floating point artefacts.'''

        actual = decimal.Decimal(actual)
        desired = decimal.Decimal(desired)
        if places is not None:
            quantum = decimal.Decimal(1).scaleb(-places)
            actual = actual.quantize(quantum)
            desired = desired.quantize(quantum)
        self.assertEqual(actual, desired)

    def assertUnits(self, actual, *localnames):
        'Assert that a sequence of units has the given local names, in order.'

        self.assertEqual([unit.localname for unit in actual], list(localnames))


# vim:sw=4:sts=4:et
