import calendar
import datetime
import numbers
from typing import Union

from .exceptions import InvalidParameters

#   An HOTP value is reduced modulo 10^digits from an unsigned 32-bit
#   integer, so 10^digits may not exceed 2^32.
#       10^9  = 1_000_000_000 <= 4_294_967_296
#       10^10 = 10_000_000_000 >  4_294_967_296
#   digits = 0 is accepted; 10^0 = 1, so every passcode is 0.
MAX_DIGITS = 9
MOVING_FACTOR_SIZE = 8
COUNTER_LIMIT = 1 << (8 * MOVING_FACTOR_SIZE)

Instant = Union[int, float, datetime.datetime]


def int_to_bytestring(i: int, padding: int = MOVING_FACTOR_SIZE) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    #   12345 -> b"\x00\x00\x00\x00\x00\x00\x30\x39"
    #   The most significant byte comes first (big-endian).
    if i < 0 or i >= 1 << (8 * padding):
        raise OverflowError("{} does not fit in {} unsigned bytes".format(i, padding))
    return i.to_bytes(padding, "big")


def bytestring_to_int(b: bytes) -> int:
    """
    Reads a big-endian unsigned integer back out of a bytestring.
    """
    return int.from_bytes(b, "big")


def key_bytes(key: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Normalizes the shared secret to immutable bytes.

    :param key: raw secret; text is encoded as UTF-8
    :returns: secret as bytes
    """
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise InvalidParameters("key must be bytes or str, not {}".format(type(key).__name__))


def check_digits(digits: int) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidParameters("digits must be an integer")
    if digits < 0:
        raise InvalidParameters("digits must not be negative")
    if digits > MAX_DIGITS:
        raise InvalidParameters("digits must be no greater than {}".format(MAX_DIGITS))
    return digits


def to_timestamp(value: Instant) -> Union[int, float]:
    """
    Converts an instant to seconds since the Unix epoch.

    Naive datetimes are read as UTC, aware ones are converted to UTC first.

    :param value: Unix seconds or a datetime
    :returns: Unix seconds
    """
    if isinstance(value, datetime.datetime):
        # utctimetuple() leaves naive datetimes as they are; timegm drops microseconds
        return calendar.timegm(value.utctimetuple()) + value.microsecond / 1_000_000
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError("instant must be a number or a datetime, not {}".format(type(value).__name__))
    return value


def format_code(code: int, digits: int) -> str:
    """
    Renders a passcode for display, left-padded with zeros.

    :param code: passcode as returned by ``get_code()``
    :param digits: the generator's digit count
    :returns: e.g. ``format_code(7081804, 8) -> "07081804"``
    """
    #   Same trick as adding 10^10 and keeping the tail, but str.zfill
    #   does not need a bound on digits.
    return str(code).zfill(digits)
