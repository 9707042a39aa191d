class OTPError(Exception):
    """
    Base class for the errors raised while building a generator or
    computing a passcode. The lower-level helpers in ``otpengine.utils``
    and ``otpengine.otp`` raise the builtin ``ValueError``, ``TypeError``
    or ``OverflowError`` instead.
    """


class InvalidParameters(OTPError, ValueError):
    """
    A generator was constructed with arguments it cannot work with:
    a digit count outside 0..9, a step that is not a positive integer,
    a counter outside the unsigned 64-bit range, a key that is not
    bytes or text, or a moving factor source of the wrong type.
    """


class HmacError(OTPError):
    """
    The HMAC-SHA1 primitive refused the key or the message.
    """


# Name used by callers that think of this as a failure to set up the MAC.
HmacInitializationError = HmacError


class MovingFactorError(OTPError):
    """
    A moving factor source could not produce its 8 bytes.
    """


class ClockError(MovingFactorError):
    """
    The clock handed back a reading that does not map to a time step,
    e.g. an instant earlier than the epoch.
    """
