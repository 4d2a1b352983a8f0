# -*- coding: utf-8 -*-

"""
Serport - synchronous serial port transport for Python

Features:
- Open, configure, read, write and close one port per transport
- COMMTIMEOUTS style timeouts with partial transfers reported as counts
- Delimiter-terminated reads
- Port enumeration by probing
- Integer status codes instead of exceptions at the call surface
"""

from .transport import SerialTransport

from .ports import list_ports
from .ports import available_ports
from .ports import probe_ports
from .ports import candidate_ports

from .config import Parity
from .config import StopBits
from .config import LineSettings
from .config import TimeoutPolicy
from .config import DEFAULT_TIMEOUTS

from .status import StatusCode
from .status import is_error

from .exceptions import SerportError
from .exceptions import SerialHandleError
from .exceptions import SerialConnectionError
from .exceptions import SerialCloseError
from .exceptions import SerialReadError
from .exceptions import SerialWriteError
from .exceptions import SerialConfigError
from .exceptions import SerialGetPropertyError
from .exceptions import SerialSetPropertyError
from .exceptions import SerialTimeoutConfigError
from .exceptions import SerialBufferError
from .exceptions import PlatformNotSupportedError

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Transport
    'SerialTransport',

    # Port enumeration
    'list_ports',
    'available_ports',
    'probe_ports',
    'candidate_ports',

    # Configuration
    'Parity',
    'StopBits',
    'LineSettings',
    'TimeoutPolicy',
    'DEFAULT_TIMEOUTS',

    # Status codes
    'StatusCode',
    'is_error',

    # Exceptions
    'SerportError',
    'SerialHandleError',
    'SerialConnectionError',
    'SerialCloseError',
    'SerialReadError',
    'SerialWriteError',
    'SerialConfigError',
    'SerialGetPropertyError',
    'SerialSetPropertyError',
    'SerialTimeoutConfigError',
    'SerialBufferError',
    'PlatformNotSupportedError',
]
