from dimutils.quantityvalue import QuantityValue
from dimutils.testing import TestCase
from decimal import Decimal
from . import vocab


class quantityvalue(TestCase):

    def setUp(self):
        super().setUp()
        self.qudt = vocab.build()
        self.unit = self.qudt.unit_from_localname

    def test_value(self):
        self.assertEqual(QuantityValue('2.5', self.unit('M')).value, Decimal('2.5'))
        self.assertEqual(QuantityValue(0.1, self.unit('M')).value, Decimal('0.1'))

    def test_convert(self):
        converted = QuantityValue(36, self.unit('DEG_C')).convert(self.unit('K'))
        self.assertEqual(converted.unit, self.unit('K'))
        self.assertDecimalEqual(converted.value, '309.15')

    def test_convert_difference(self):
        difference = self.qudt.quantity_kind_from_localname('TemperatureDifference')
        converted = QuantityValue(36, self.unit('DEG_C')).convert(self.unit('K'), difference)
        self.assertDecimalEqual(converted.value, 36)

    def test_equality(self):
        self.assertEqual(QuantityValue(1, self.unit('M')), QuantityValue('1.0', self.unit('M')))
        self.assertEqual(hash(QuantityValue(1, self.unit('M'))), hash(QuantityValue('1.0', self.unit('M'))))
        self.assertNotEqual(QuantityValue(1, self.unit('M')), QuantityValue(1, self.unit('FT')))

    def test_str(self):
        self.assertEqual(str(QuantityValue('1.5', self.unit('KiloM'))), '1.5km')
        self.assertEqual(repr(QuantityValue('1.5', self.unit('M'))), "QuantityValue('1.5', Unit(M))")
