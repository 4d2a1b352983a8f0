# -*- coding: utf-8 -*-

"""
Access to caller-owned buffers.

Views are only held for the duration of a call.
"""
from .exceptions import SerialBufferError


def byte_view(buffer, capacity: int) -> memoryview:
    """
    Flat byte view of ``buffer`` checked to hold ``capacity`` bytes.

    Raises:
        SerialBufferError: If ``buffer`` does not support the buffer protocol
            or ``capacity`` is negative or larger than the buffer.
    """
    try:
        view = memoryview(buffer).cast('B')
    except TypeError as e:
        raise SerialBufferError(f"Not a usable buffer: {e}") from e

    if capacity < 0 or capacity > len(view):
        raise SerialBufferError(
            f"Capacity {capacity} does not fit a buffer of {len(view)} bytes"
        )
    return view


def writable_view(buffer, capacity: int) -> memoryview:
    """Like :func:`byte_view`, for destination buffers"""
    view = byte_view(buffer, capacity)
    if view.readonly:
        raise SerialBufferError("Destination buffer is read-only")
    return view
