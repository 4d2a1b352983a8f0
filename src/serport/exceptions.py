# -*- coding: utf-8 -*-

"""
Serport exceptions

Raised inside the package and turned into negative status codes at the call
surface by :func:`reports_status`.
"""
import functools
import logging

from .status import StatusCode


class SerportError(Exception):
    """Base exception for all serport errors"""
    status = None

    def __init__(self, message: str = '', status: StatusCode = None):
        super().__init__(message)
        if status is not None:
            self.status = status

class SerialHandleError(SerportError):
    """Operation attempted without a valid handle"""
    status = StatusCode.INVALID_HANDLE_ERROR

class SerialConnectionError(SerialHandleError):
    """Failed to open serial port"""
    pass

class SerialCloseError(SerportError):
    """Host failed to release the handle"""
    status = StatusCode.CLOSE_HANDLE_ERROR

class SerialReadError(SerportError):
    """Read failed for a reason other than a timeout"""
    status = StatusCode.READ_ERROR

class SerialWriteError(SerportError):
    """Write failed for a reason other than a timeout"""
    status = StatusCode.WRITE_ERROR

class SerialConfigError(SerportError):
    """Invalid serial configuration"""
    status = StatusCode.SET_PROPERTY_ERROR

class SerialGetPropertyError(SerialConfigError):
    """Line settings could not be read back from the port"""
    status = StatusCode.GET_PROPERTY_ERROR

class SerialSetPropertyError(SerialConfigError):
    """Port rejected the requested line settings"""
    status = StatusCode.SET_PROPERTY_ERROR

class SerialTimeoutConfigError(SerialConfigError):
    """Port rejected the requested timeouts"""
    status = StatusCode.SET_TIMEOUT_ERROR

class SerialBufferError(SerportError):
    """Caller buffer too small or not usable"""
    status = StatusCode.BUFFER_ERROR

class PlatformNotSupportedError(SerportError):
    """No port probe space is known for this platform"""
    status = StatusCode.NOT_FOUND_ERROR


def reports_status(func):
    """
    Convert a raised :class:`SerportError` into its status code.

    The wrapped callable returns its own result on success.
    """
    log = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SerportError as e:
            log.debug('%s failed with %s: %s', func.__name__, e.status.name, e)
            return e.status

    return wrapper
