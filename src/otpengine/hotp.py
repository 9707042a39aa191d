import logging
from typing import Union

from . import utils
from .exceptions import InvalidParameters
from .otp import DEFAULT_DIGITS, OTP, MovingFactor

logger = logging.getLogger(__name__)


class Counter(MovingFactor):
    """
    Moving factor backed by an unsigned 64-bit counter.

    Each :meth:`produce` returns the current count and then increments it,
    wrapping from ``2**64 - 1`` back to 0. The read and the increment are
    not guarded by a lock: share an instance between threads only behind
    the caller's own synchronization.
    """

    def __init__(self, count: int = 0) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidParameters("counter must be an integer")
        if not 0 <= count < utils.COUNTER_LIMIT:
            raise InvalidParameters("counter must be in [0, 2**64)")
        self._count = count

    def __repr__(self) -> str:
        return "Counter(count={})".format(self._count)

    @property
    def count(self) -> int:
        """
        The value the next :meth:`produce` call will use.
        """
        return self._count

    def produce(self) -> bytes:
        c = self._count
        self._count = (c + 1) % utils.COUNTER_LIMIT
        if self._count == 0:
            logger.debug("counter wrapped around to 0")
        return utils.int_to_bytestring(c)


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.

    Calling :meth:`get_code` twice gives two different passcodes: every
    call consumes one counter value.

    >>> hotp = HOTP(b"12345678901234567890")
    >>> hotp.get_code()
    755224
    >>> hotp.get_code()
    287082
    """

    def __init__(
        self,
        key: Union[bytes, str],
        initial_count: int = 0,
        digits: int = DEFAULT_DIGITS,
    ) -> None:
        """
        :param key: shared secret, raw bytes (text is UTF-8 encoded)
        :param initial_count: counter value used by the first passcode, defaults to 0
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        """
        super().__init__(key, Counter(initial_count), digits=digits)

    @property
    def count(self) -> int:
        """
        Counter value the next passcode will be computed from.
        """
        return self.generator.count
