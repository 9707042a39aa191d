import logging
import math
import time
from typing import Callable, Optional, Union

from . import utils
from .exceptions import ClockError, InvalidParameters
from .otp import DEFAULT_DIGITS, OTP, MovingFactor

DEFAULT_STEP = 30
DEFAULT_EPOCH = 0

logger = logging.getLogger(__name__)

Clock = Callable[[], utils.Instant]


class Time(MovingFactor):
    """
    Moving factor derived from the clock: the number of whole ``step``
    second intervals elapsed since ``t0``.

    Nothing is stored between calls, so every reading inside the same
    ``[t0 + n*step, t0 + (n+1)*step)`` window produces the same bytes.
    Safe to share between threads as long as ``clock`` is.
    """

    def __init__(
        self,
        t0: utils.Instant = DEFAULT_EPOCH,
        step: int = DEFAULT_STEP,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        :param t0: epoch, in Unix seconds or as a datetime
        :param step: window length in seconds, must be positive
        :param clock: zero-argument callable returning "now"; defaults to ``time.time``
        """
        if isinstance(step, bool) or not isinstance(step, int):
            raise InvalidParameters("step must be an integer number of seconds")
        if step <= 0:
            raise InvalidParameters("step must be positive")
        if clock is not None and not callable(clock):
            raise InvalidParameters("clock must be callable")
        try:
            self.t0 = utils.to_timestamp(t0)
        except TypeError as e:
            raise InvalidParameters(str(e)) from e
        if isinstance(self.t0, float) and not math.isfinite(self.t0):
            raise InvalidParameters("epoch must be a finite instant, got {}".format(self.t0))
        self.step = step
        self.clock = clock if clock is not None else time.time

    def __repr__(self) -> str:
        return "Time(t0={}, step={})".format(self.t0, self.step)

    def timecode(self, for_time: utils.Instant) -> int:
        """
        Maps an instant to its time step.

        :param for_time: Unix seconds or a datetime
        :returns: ``floor(elapsed / step)`` with elapsed truncated to whole seconds
        """
        try:
            now = utils.to_timestamp(for_time)
        except TypeError as e:
            raise ClockError(str(e)) from e
        if isinstance(now, float) and not math.isfinite(now):
            raise ClockError("clock returned {}".format(now))
        if now < self.t0:
            logger.debug("clock reading %s is before epoch %s", now, self.t0)
            raise ClockError("current time is earlier than the epoch")
        steps = int(now - self.t0) // self.step
        if steps >= utils.COUNTER_LIMIT:
            raise ClockError("time step {} does not fit in 64 bits".format(steps))
        return steps

    def produce(self) -> bytes:
        return utils.int_to_bytestring(self.timecode(self.clock()))


class TOTP(OTP):
    """
    Handler for time-based OTP counters.

    Repeated calls to :meth:`get_code` return the same passcode while the
    clock stays inside one ``step`` window.

    >>> totp = TOTP(b"12345678901234567890", digits=8, clock=lambda: 59)
    >>> totp.get_code()
    94287082
    """

    def __init__(
        self,
        key: Union[bytes, str],
        t0: utils.Instant = DEFAULT_EPOCH,
        step: int = DEFAULT_STEP,
        digits: int = DEFAULT_DIGITS,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        :param key: shared secret, raw bytes (text is UTF-8 encoded)
        :param t0: epoch the steps are counted from, defaults to the Unix epoch
        :param step: seconds a passcode stays valid, defaults to 30
        :param digits: number of integers in the OTP
        :param clock: zero-argument callable returning "now", for tests;
            defaults to the system clock
        """
        super().__init__(key, Time(t0, step, clock), digits=digits)

    @property
    def step(self) -> int:
        return self.generator.step

    @property
    def t0(self) -> Union[int, float]:
        return self.generator.t0
