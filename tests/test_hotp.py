import unittest
from unittest import mock

import otpengine
from otpengine import HOTP, Counter

RFC_KEY = b"12345678901234567890"

# RFC 4226 appendix D
RFC_CODES = [755224, 287082, 359152, 969429, 338314, 254676, 287922, 162583, 399871, 520489]


class CounterTest(unittest.TestCase):
    def test_produce_then_increment(self):
        counter = Counter(41)
        self.assertEqual(counter.produce(), (41).to_bytes(8, "big"))
        self.assertEqual(counter.count, 42)
        self.assertEqual(counter.produce(), (42).to_bytes(8, "big"))

    def test_wraps_at_64_bits(self):
        counter = Counter(2**64 - 1)
        self.assertEqual(counter.produce(), b"\xff" * 8)
        self.assertEqual(counter.count, 0)
        self.assertEqual(counter.produce(), bytes(8))
        self.assertEqual(counter.count, 1)

    def test_rejects_out_of_range(self):
        for count in (-1, 2**64, 1.5, None, False):
            with self.subTest(count=count):
                with self.assertRaises(otpengine.InvalidParameters):
                    Counter(count)


class HOTPTest(unittest.TestCase):
    def test_rfc_vectors(self):
        for counter, expected in enumerate(RFC_CODES):
            with self.subTest(counter=counter):
                self.assertEqual(HOTP(RFC_KEY, counter, 6).get_code(), expected)

    def test_increments_the_counter(self):
        hotp = HOTP(RFC_KEY, 0, 6)
        self.assertEqual([hotp.get_code() for _ in RFC_CODES], RFC_CODES)
        self.assertEqual(hotp.count, len(RFC_CODES))

    def test_sequence_matches_direct_construction(self):
        start = 3
        hotp = HOTP(RFC_KEY, initial_count=start)
        for i in range(5):
            with self.subTest(i=i):
                self.assertEqual(hotp.get_code(), HOTP(RFC_KEY, initial_count=start + i).get_code())

    def test_consecutive_calls_differ(self):
        hotp = HOTP(RFC_KEY)
        self.assertNotEqual(hotp.get_code(), hotp.get_code())

    def test_text_key(self):
        self.assertEqual(HOTP("12345678901234567890").get_code(), 755224)

    def test_wraparound_code_matches_counter_zero(self):
        hotp = HOTP(RFC_KEY, initial_count=2**64 - 1)
        hotp.get_code()
        self.assertEqual(hotp.count, 0)
        self.assertEqual(hotp.get_code(), RFC_CODES[0])

    def test_counter_stays_advanced_after_hmac_failure(self):
        hotp = HOTP(RFC_KEY, initial_count=5)
        with mock.patch("otpengine.otp.hmac.new", side_effect=ValueError("bad key")):
            with self.assertRaises(otpengine.HmacError):
                hotp.get_code()
        self.assertEqual(hotp.count, 6)
        self.assertEqual(hotp.get_code(), RFC_CODES[6])

    def test_invalid_construction(self):
        with self.assertRaises(otpengine.InvalidParameters):
            HOTP(RFC_KEY, initial_count=-1)
        with self.assertRaises(otpengine.InvalidParameters):
            HOTP(RFC_KEY, digits=10)


if __name__ == "__main__":
    unittest.main()
