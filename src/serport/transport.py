# -*- coding: utf-8 -*-

"""
Synchronous SerialTransport built on pyserial.

Every public operation returns an int: a non-negative count (or 0 for
success) or a negative :class:`~serport.status.StatusCode`.
"""

import dataclasses
import logging
import serial

from serial.serialutil import Timeout
from typing import Optional

from .buffers import byte_view
from .buffers import writable_view
from .config import DEFAULT_TIMEOUTS
from .config import LineSettings
from .config import Parity
from .config import StopBits
from .config import TimeoutPolicy
from .config import as_bytes
from .exceptions import SerialBufferError
from .exceptions import SerialCloseError
from .exceptions import SerialConnectionError
from .exceptions import SerialGetPropertyError
from .exceptions import SerialHandleError
from .exceptions import SerialReadError
from .exceptions import SerialSetPropertyError
from .exceptions import SerialTimeoutConfigError
from .exceptions import SerialWriteError
from .exceptions import reports_status
from .ports import list_ports as _list_ports
from .ports import open_exclusive
from .status import StatusCode

log = logging.getLogger('serport.transport')

_HOST_ERRORS = (serial.SerialException, OSError)


class SerialTransport:
    """
    Blocking serial transport owning at most one open port.

    Features:
    - Line settings applied once at open, released on any failure
    - Reads and writes bounded by a COMMTIMEOUTS style policy
    - Partial transfers on timeout reported as counts, not errors
    - Delimiter search across single-byte reads

    Instances are independent but not thread-safe: callers sharing one
    instance between threads must serialize every call.
    """

    def __init__(self, *, timeouts: TimeoutPolicy = DEFAULT_TIMEOUTS):
        self._serial: Optional[serial.Serial] = None
        self._port: Optional[str] = None
        self._settings: Optional[LineSettings] = None

        # Policy installed by open and the one last applied to the port
        self._default_timeouts = timeouts
        self._timeouts = timeouts

        # Reset at the start of every read_until
        self._accrual = bytearray()

    def __enter__(self) -> 'SerialTransport':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.is_open:
            self.close()

    @property
    def is_open(self) -> bool:
        return self._serial is not None

    @property
    def port(self) -> Optional[str]:
        return self._port

    @property
    def line_settings(self) -> Optional[LineSettings]:
        return self._settings

    @property
    def timeouts(self) -> TimeoutPolicy:
        """Timeout policy most recently applied to the port"""
        return self._timeouts

    @reports_status
    def open(
            self,
            port: str,
            baudrate: int,
            bytesize: int = serial.EIGHTBITS,
            parity: int = Parity.NONE,
            stopbits: int = StopBits.ONE
        ) -> int:
        """
        Open and configure ``port``.

        Args:
            port: Host device name (e.g. 'COM3', '/dev/ttyUSB0') or pyserial URL
            baudrate: Baud rate
            bytesize: Number of data bits
            parity: :class:`~serport.config.Parity` value
            stopbits: :class:`~serport.config.StopBits` value

        Returns:
            SUCCESS, INVALID_HANDLE_ERROR if the port cannot be opened (or this
            transport is already open), GET_PROPERTY_ERROR, SET_PROPERTY_ERROR
            or SET_TIMEOUT_ERROR. The port is released on every failure.
        """
        if self._serial is not None:
            raise SerialHandleError(f"Transport already open on {self._port}")

        try:
            ser = open_exclusive(port)
        except (serial.SerialException, OSError, ValueError) as e:
            raise SerialConnectionError(f"Failed to open serial port {port}: {e}") from e

        try:
            settings = LineSettings(baudrate, bytesize, parity, stopbits)
            self._configure(ser, settings)
            self._set_read_timeouts(ser, self._default_timeouts, 0)
            self._set_write_timeouts(ser, self._default_timeouts, 0)
        except BaseException:
            self._release(ser)
            raise

        self._serial = ser
        self._timeouts = self._default_timeouts
        self._port = port
        self._settings = settings
        log.debug('Opened %s with %s', port, settings)
        return StatusCode.SUCCESS

    def _configure(self, ser: serial.Serial, settings: LineSettings):
        try:
            current = ser.get_settings()
        except _HOST_ERRORS as e:
            raise SerialGetPropertyError(f"Cannot read port settings: {e}") from e

        try:
            current.update(settings.to_pyserial())
            ser.apply_settings(current)
        except (serial.SerialException, OSError, ValueError) as e:
            raise SerialSetPropertyError(f"Port rejected {settings}: {e}") from e

    @staticmethod
    def _release(ser: serial.Serial):
        try:
            ser.close()
        except _HOST_ERRORS:
            log.warning('Failed to release port after open failure', exc_info=True)

    @reports_status
    def close(self) -> int:
        """
        Release the open port.

        A second close fails with INVALID_HANDLE_ERROR. If the host fails to
        release the port, CLOSE_HANDLE_ERROR is returned and the handle is
        dropped anyway; the transport must not be used for further I/O.
        """
        ser = self._require_handle()
        port = self._port

        self._serial = None
        self._port = None
        self._settings = None

        try:
            ser.close()
        except _HOST_ERRORS as e:
            log.warning('Failed to close %s: %s', port, e)
            raise SerialCloseError(f"Failed to close {port}: {e}") from e

        log.debug('Closed %s', port)
        return StatusCode.SUCCESS

    def _require_handle(self) -> serial.Serial:
        if self._serial is None:
            raise SerialHandleError("Serial port is not open")
        return self._serial

    def _update_timeouts(self, **changes) -> TimeoutPolicy:
        try:
            return dataclasses.replace(self._timeouts, **changes)
        except ValueError as e:
            raise SerialTimeoutConfigError(str(e)) from e

    def _set_read_timeouts(self, ser: serial.Serial, policy: TimeoutPolicy, size: int):
        try:
            ser.timeout = policy.read_timeout(size)
            ser.inter_byte_timeout = policy.interval_timeout
        except (serial.SerialException, OSError, ValueError) as e:
            raise SerialTimeoutConfigError(f"Port rejected read timeouts: {e}") from e

    def _set_write_timeouts(self, ser: serial.Serial, policy: TimeoutPolicy, size: int):
        try:
            ser.write_timeout = policy.write_timeout(size)
        except (serial.SerialException, OSError, ValueError) as e:
            raise SerialTimeoutConfigError(f"Port rejected write timeouts: {e}") from e

    @reports_status
    def read(self, buffer, capacity: int, timeout: int, multiplier: int) -> int:
        """
        Read up to ``capacity`` bytes into ``buffer`` in one bounded attempt.

        ``timeout`` becomes both the interval and the total read constant,
        ``multiplier`` the per-byte total read multiplier (milliseconds).
        Fewer bytes than requested, including none, means the timeout elapsed.

        Returns:
            Number of bytes read or a negative status code.
        """
        ser = self._require_handle()
        view = writable_view(buffer, capacity)

        policy = self._update_timeouts(
            interval=timeout, read_constant=timeout, read_multiplier=multiplier
        )
        self._set_read_timeouts(ser, policy, capacity)
        self._timeouts = policy

        try:
            data = ser.read(capacity)
        except _HOST_ERRORS as e:
            raise SerialReadError(f"Read from {self._port} failed: {e}") from e

        view[:len(data)] = data
        return len(data)

    @reports_status
    def read_until(
            self,
            buffer,
            capacity: int,
            timeout: int,
            multiplier: int,
            delimiter
        ) -> int:
        """
        Read byte by byte until ``delimiter`` has been received.

        Stops when the delimiter is found (it is included), ``capacity`` bytes
        have accumulated, or an attempt returns nothing. The accumulated bytes
        are copied into ``buffer`` followed by a zero byte, so ``buffer`` must
        have room for one byte more than was read.

        Returns:
            Number of bytes accumulated or a negative status code.
        """
        ser = self._require_handle()
        view = writable_view(buffer, 0)
        if capacity < 0:
            raise SerialBufferError(f"Invalid capacity {capacity}")
        delimiter = as_bytes(delimiter)

        policy = self._update_timeouts(
            interval=timeout, read_constant=timeout, read_multiplier=multiplier
        )
        self._set_read_timeouts(ser, policy, 1)
        self._timeouts = policy

        accrued = self._accrual
        accrued.clear()
        found = not delimiter

        try:
            while not found and len(accrued) < capacity:
                chunk = ser.read(1)
                if not chunk:
                    break
                accrued += chunk
                # only the newest byte can complete a match
                found = accrued.endswith(delimiter)
        except _HOST_ERRORS as e:
            raise SerialReadError(f"Read from {self._port} failed: {e}") from e

        count = len(accrued)
        if count + 1 > len(view):
            raise SerialBufferError(
                f"{count} bytes plus terminator do not fit a buffer of {len(view)} bytes"
            )

        view[:count] = accrued
        view[count] = 0
        return count

    @reports_status
    def write(self, buffer, capacity: int, timeout: int, multiplier: int) -> int:
        """
        Write up to ``capacity`` bytes of ``buffer`` in one bounded attempt.

        ``timeout`` and ``multiplier`` set the total write constant and
        per-byte multiplier (milliseconds). Bytes are handed to the port one
        at a time, each limited to the time left of the total, so the count
        is exact when the deadline passes first.

        Returns:
            Number of bytes accepted by the port or a negative status code.
        """
        ser = self._require_handle()
        data = byte_view(buffer, capacity)

        policy = self._update_timeouts(write_constant=timeout, write_multiplier=multiplier)
        self._set_write_timeouts(ser, policy, capacity)
        self._timeouts = policy

        deadline = Timeout(policy.write_timeout(capacity))
        written = 0
        try:
            while written < capacity and not deadline.expired():
                # each byte may only block for what is left of the total
                if not deadline.is_infinite:
                    ser.write_timeout = deadline.time_left()
                written += ser.write(data[written:written + 1].tobytes())
        except serial.SerialTimeoutException:
            log.debug('Write to %s timed out after %d of %d bytes', self._port, written, capacity)
        except _HOST_ERRORS as e:
            raise SerialWriteError(f"Write to {self._port} failed: {e}") from e

        return written

    def list_ports(self, buffer, capacity: int, separator=',') -> int:
        """Enumerate available ports, see :func:`serport.ports.list_ports`"""
        return _list_ports(buffer, capacity, separator)
