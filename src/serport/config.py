# -*- coding: utf-8 -*-

"""
Line settings and timeout policy for serport.

Parity and stop bit values follow the host DCB numbering so callers passing
plain integers keep working.
"""
import enum
import serial

from dataclasses import dataclass
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

from .exceptions import SerialBufferError


class Parity(enum.IntEnum):
    NONE = 0
    ODD = 1
    EVEN = 2
    MARK = 3
    SPACE = 4


class StopBits(enum.IntEnum):
    ONE = 0
    ONE_POINT_FIVE = 1
    TWO = 2


_PARITIES = {
    Parity.NONE: serial.PARITY_NONE,
    Parity.ODD: serial.PARITY_ODD,
    Parity.EVEN: serial.PARITY_EVEN,
    Parity.MARK: serial.PARITY_MARK,
    Parity.SPACE: serial.PARITY_SPACE,
}

_STOPBITS = {
    StopBits.ONE: serial.STOPBITS_ONE,
    StopBits.ONE_POINT_FIVE: serial.STOPBITS_ONE_POINT_FIVE,
    StopBits.TWO: serial.STOPBITS_TWO,
}


@dataclass(frozen=True)
class LineSettings:
    """Baud rate, data bits, parity and stop bits of an open connection."""

    baudrate: int
    bytesize: int = serial.EIGHTBITS
    parity: int = Parity.NONE
    stopbits: int = StopBits.ONE

    def to_pyserial(self) -> Dict[str, Any]:
        """
        Translate into keys understood by ``serial.Serial.apply_settings``.

        Raises:
            ValueError: If baud rate, parity or stop bits are out of range.
                Data bits are validated by pyserial itself.
        """
        if not isinstance(self.baudrate, int) or self.baudrate <= 0:
            raise ValueError(f"Invalid baud rate: {self.baudrate!r}")

        return {
            'baudrate': self.baudrate,
            'bytesize': self.bytesize,
            'parity': _PARITIES[Parity(self.parity)],
            'stopbits': _STOPBITS[StopBits(self.stopbits)],
        }


@dataclass(frozen=True)
class TimeoutPolicy:
    """
    Timeouts in milliseconds, composed the way host COMMTIMEOUTS are.

    The total timeout of an attempt moving N bytes is
    ``constant + multiplier * N``. A zero constant and zero multiplier
    mean the attempt blocks until it completes. A zero interval disables
    the inter-byte timeout.
    """

    interval: int = 0
    read_constant: int = 0
    read_multiplier: int = 0
    write_constant: int = 0
    write_multiplier: int = 0

    def __post_init__(self):
        for name, value in vars(self).items():
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def interval_timeout(self) -> Optional[float]:
        """Inter-byte timeout in seconds, None if unused"""
        return self.interval / 1000.0 if self.interval else None

    def read_timeout(self, size: int) -> Optional[float]:
        """Total read timeout in seconds for ``size`` bytes"""
        return _total(self.read_constant, self.read_multiplier, size)

    def write_timeout(self, size: int) -> Optional[float]:
        """Total write timeout in seconds for ``size`` bytes"""
        return _total(self.write_constant, self.write_multiplier, size)


def _total(constant: int, multiplier: int, size: int) -> Optional[float]:
    if not constant and not multiplier:
        return None
    return (constant + multiplier * size) / 1000.0


DEFAULT_TIMEOUTS = TimeoutPolicy(
    interval=50,
    read_constant=50,
    read_multiplier=10,
    write_constant=50,
    write_multiplier=10,
)


def as_bytes(value: Union[bytes, bytearray, memoryview, str, int]) -> bytes:
    """
    Normalize a delimiter or separator to bytes.

    Text is encoded as UTF-8 and an int is taken as a single byte value.

    Raises:
        SerialBufferError: If ``value`` is an int outside 0-255 or not
            text, an int or a bytes-like object.
    """
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise SerialBufferError(f"Byte value out of range: {value}")
        return bytes([value])
    try:
        return bytes(memoryview(value))
    except TypeError as e:
        raise SerialBufferError(f"Not usable as bytes: {value!r}") from e
