from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from printing.formatting import format_number, format_timestamp


class FormatNumberTests(SimpleTestCase):
    def test_thousands_are_grouped_with_dots(self):
        self.assertEqual(format_number(Decimal("20000.00")), "20.000")
        self.assertEqual(format_number(1250000), "1.250.000")

    def test_small_numbers_are_not_grouped(self):
        self.assertEqual(format_number(0), "0")
        self.assertEqual(format_number(Decimal("999")), "999")

    def test_fraction_uses_comma_and_drops_trailing_zeros(self):
        self.assertEqual(format_number(Decimal("12500.50")), "12.500,5")
        self.assertEqual(format_number(Decimal("0.125")), "0,125")

    def test_fraction_is_rounded_to_three_digits(self):
        self.assertEqual(format_number(Decimal("1.23456")), "1,235")

    def test_negative_numbers(self):
        self.assertEqual(format_number(Decimal("-2500")), "-2.500")


class FormatTimestampTests(SimpleTestCase):
    @override_settings(TIME_ZONE="Asia/Jakarta")
    def test_aware_timestamp_is_rendered_in_local_time(self):
        ts = datetime(2026, 1, 5, 7, 30, 15, tzinfo=dt_timezone.utc)
        self.assertEqual(format_timestamp(ts), "05/01/2026, 14.30.15")

    def test_naive_timestamp_is_rendered_as_is(self):
        ts = datetime(2026, 12, 31, 23, 59, 1)
        self.assertEqual(format_timestamp(ts), "31/12/2026, 23.59.01")
