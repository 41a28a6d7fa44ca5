import unittest
from datetime import datetime, timezone

from odrivefs.util.time import (
    normalize_dt,
    now_utc,
    parse_http_date,
    parse_rfc3339,
    to_epoch_ms,
)


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_normalize_dt_rejects_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0, 0)
        with self.assertRaises(ValueError):
            normalize_dt(naive)

    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_seven_fraction_digits(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.1234567Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123456, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_short_fraction(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.5Z")
        self.assertEqual(dt.microsecond, 500000)

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("yesterday")
        with self.assertRaises(ValueError):
            parse_rfc3339("")

    def test_parse_http_date(self) -> None:
        dt = parse_http_date("Wed, 01 Jan 2025 12:00:00 GMT")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))

    def test_parse_http_date_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            parse_http_date("not a date")

    def test_to_epoch_ms(self) -> None:
        self.assertEqual(to_epoch_ms(None), 0)
        self.assertEqual(
            to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)), 1000
        )


if __name__ == "__main__":
    unittest.main()
