import abc
import hashlib
import hmac
import logging
from typing import Union

from . import utils
from .exceptions import HmacError, InvalidParameters, MovingFactorError

DEFAULT_DIGITS = 6
DIGEST_SIZE = hashlib.sha1().digest_size
TRUNCATION_SIZE = 4

logger = logging.getLogger(__name__)

#   OTP engine
#
#       MovingFactor.produce()   -> 8 bytes (counter or time step)
#           HMAC-SHA1(key, bytes) -> 20 bytes
#               dynamic_truncate() -> 4 bytes, top bit cleared
#                   big-endian int % 10^digits -> passcode


class MovingFactor(abc.ABC):
    """
    Source of the 8 bytes fed to the HMAC before each passcode.

    Implementations may advance internal state every time ``produce`` is
    called. A source that cannot produce its bytes raises
    :class:`~otpengine.exceptions.MovingFactorError`.
    """

    @abc.abstractmethod
    def produce(self) -> bytes:
        """
        :returns: the next moving factor, exactly 8 bytes
        """


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """
    :param key: shared secret
    :param message: moving factor bytes
    :returns: 20-byte HMAC-SHA1 digest
    """
    try:
        hasher = hmac.new(key, message, hashlib.sha1)
    except (TypeError, ValueError) as e:
        raise HmacError("could not initialize HMAC-SHA1: {}".format(e)) from e
    return hasher.digest()


def truncation_offset(hs: bytes) -> int:
    # Low nibble of the last byte, 0..15
    return hs[-1] & 0xF


def truncate_window(hs: bytes, offset: int) -> bytes:
    """
    Picks the 4 bytes starting at ``offset``.

    The offset comes from a 4-bit nibble, so the window ends at index
    15 + 3 = 18 at the latest, inside a 20-byte digest.
    """
    if not 0 <= offset <= len(hs) - TRUNCATION_SIZE:
        raise ValueError("offset {} leaves no {}-byte window in a {}-byte digest".format(offset, TRUNCATION_SIZE, len(hs)))
    return bytes(hs[offset : offset + TRUNCATION_SIZE])


def dynamic_truncate(hs: bytes) -> bytes:
    """
    RFC 4226 dynamic truncation.

    :param hs: 20-byte HMAC-SHA1 digest
    :returns: 4 bytes whose most significant bit is always 0
    """
    if len(hs) != DIGEST_SIZE:
        raise ValueError("expected a {}-byte digest, got {}".format(DIGEST_SIZE, len(hs)))
    window = bytearray(truncate_window(hs, truncation_offset(hs)))
    #   0xFF & 0x7F = 0x7F: the value read back is below 2^31, so it
    #   never depends on signed vs unsigned interpretation.
    window[0] &= 0x7F
    return bytes(window)


class OTP(object):
    """
    Passcode engine shared by HOTP and TOTP.

    Every call to :meth:`get_code` asks the moving factor source for fresh
    bytes, which may advance it. There is no way to look at the next
    passcode without consuming it.
    """

    def __init__(
        self,
        key: Union[bytes, str],
        generator: MovingFactor,
        digits: int = DEFAULT_DIGITS,
    ) -> None:
        """
        :param key: shared secret, raw bytes (text is UTF-8 encoded)
        :param generator: source of the 8-byte moving factor
        :param digits: number of decimal digits in the passcode, 0 to 9
        """
        self.digits = utils.check_digits(digits)
        if not isinstance(generator, MovingFactor):
            raise InvalidParameters("generator must be a MovingFactor, not {}".format(type(generator).__name__))
        self._key = utils.key_bytes(key)
        self.generator = generator

    def __repr__(self) -> str:
        return "{}(digits={}, generator={!r})".format(type(self).__name__, self.digits, self.generator)

    def get_code(self) -> int:
        """
        Computes the next passcode.

        :returns: an integer in ``[0, 10**digits)``; use
            :func:`otpengine.utils.format_code` to display it with leading zeros
        """
        moving_factor = self.generator.produce()
        if not isinstance(moving_factor, (bytes, bytearray)) or len(moving_factor) != utils.MOVING_FACTOR_SIZE:
            logger.debug("%r produced an unusable moving factor", self.generator)
            raise MovingFactorError(
                "moving factor must be {} bytes, got {!r}".format(utils.MOVING_FACTOR_SIZE, moving_factor)
            )
        logger.debug("computing passcode for moving factor %d", utils.bytestring_to_int(moving_factor))

        # The generator has already advanced; an HMAC failure does not undo that.
        hs = hmac_sha1(self._key, bytes(moving_factor))
        snum = utils.bytestring_to_int(dynamic_truncate(hs))
        return snum % 10**self.digits
