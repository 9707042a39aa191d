"""
HMAC-based one-time passcodes.

Implements both IETF RFCs:

* RFC 4226: simple incrementing counter (:class:`HOTP`)
* RFC 6238: time-based counter (:class:`TOTP`)

Other moving factors can be plugged into :class:`OTP` by subclassing
:class:`MovingFactor`.
"""
import logging

from .exceptions import ClockError as ClockError
from .exceptions import HmacError as HmacError
from .exceptions import HmacInitializationError as HmacInitializationError
from .exceptions import InvalidParameters as InvalidParameters
from .exceptions import MovingFactorError as MovingFactorError
from .exceptions import OTPError as OTPError
from .hotp import HOTP as HOTP
from .hotp import Counter as Counter
from .otp import OTP as OTP
from .otp import MovingFactor as MovingFactor
from .totp import TOTP as TOTP
from .totp import Time as Time
from .utils import format_code as format_code

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
