# -*- coding: utf-8 -*-

"""
Serial port enumeration by probing.

Candidate names come from a fixed numbered range per platform. Each candidate
is opened exclusively and closed again right away; nothing is cached since
devices come and go between calls.
"""

import logging
import os
import serial

from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple

from .buffers import writable_view
from .config import as_bytes
from .exceptions import PlatformNotSupportedError
from .exceptions import SerialBufferError
from .exceptions import reports_status

log = logging.getLogger('serport.ports')

# (name template, numbers) in probe order
PROBE_RANGES = {
    'nt': (
        ('COM{}', range(1, 257)),
    ),
    'posix': (
        ('/dev/ttyS{}', range(0, 32)),
        ('/dev/ttyUSB{}', range(0, 32)),
        ('/dev/ttyACM{}', range(0, 32)),
    ),
}


def open_exclusive(port: str) -> serial.Serial:
    """
    Open ``port`` (a device name or pyserial URL) with default settings.

    On POSIX the port is locked so a second opener fails, matching the
    exclusive access Windows grants by default.
    """
    kwargs = {'exclusive': True} if os.name == 'posix' else {}
    return serial.serial_for_url(port, **kwargs)


def candidate_ports() -> Iterator[str]:
    """Yield the probe space of the current platform in ascending order"""
    try:
        ranges = PROBE_RANGES[os.name]
    except KeyError:
        raise PlatformNotSupportedError(
            f'Platform {os.name} has no serial port probe range'
        ) from None

    for template, numbers in ranges:
        for number in numbers:
            yield template.format(number)


def _probe(name: str) -> bool:
    try:
        ser = open_exclusive(name)
    except (serial.SerialException, OSError, ValueError):
        return False

    try:
        ser.close()
    except (serial.SerialException, OSError):
        log.debug('Failed to release probed port %s', name, exc_info=True)
    return True


def probe_ports(candidates: Optional[Iterable[str]] = None) -> Iterator[Tuple[str, bool]]:
    """
    Lazily probe each candidate port.

    Args:
        candidates: Port names to try (default: :func:`candidate_ports`)

    Yields:
        ``(name, available)`` for every candidate, in order
    """
    if candidates is None:
        candidates = candidate_ports()

    for name in candidates:
        available = _probe(name)
        if available:
            log.debug('Found serial port %s', name)
        yield name, available


def available_ports(candidates: Optional[Iterable[str]] = None) -> List[str]:
    """Names of candidate ports that could be opened right now"""
    return [name for name, available in probe_ports(candidates) if available]


@reports_status
def list_ports(
        buffer,
        capacity: int,
        separator=',',
        candidates: Optional[Iterable[str]] = None
    ) -> int:
    """
    Write available port names, joined by ``separator``, into ``buffer``.

    The joined names are followed by a zero byte. If a port name contains
    the separator, splitting the result gives more pieces than the returned
    count; the count stays correct.

    Args:
        buffer: Writable destination owned by the caller
        capacity: Usable size of ``buffer`` in bytes
        separator: Separator placed between names
        candidates: Port names to try (default: :func:`candidate_ports`)

    Returns:
        Number of ports found, BUFFER_ERROR if the names and terminator do not
        fit (``buffer`` is left untouched), or NOT_FOUND_ERROR on a platform
        without a probe range.
    """
    view = writable_view(buffer, 0)
    separator = as_bytes(separator)

    names = available_ports(candidates)
    result = separator.join(name.encode('utf-8') for name in names)

    limit = min(capacity, len(view))
    if len(result) + 1 > limit:
        raise SerialBufferError(
            f"{len(result)} bytes of port names plus terminator exceed {limit} bytes"
        )

    view[:len(result)] = result
    view[len(result)] = 0
    return len(names)
