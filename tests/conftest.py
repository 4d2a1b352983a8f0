# -*- coding: utf-8 -*-

"""
Pytest configuration and fixtures for serport tests.
"""
import pytest

from unittest.mock import Mock, patch

from serport import SerialTransport

# Import all fixtures from virtual_ports
from .fixtures.virtual_ports import *


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (pyserial loop:// device)"
    )

    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def mock_serial():
    """Mock serial port returned by every open attempt."""
    with patch('serial.serial_for_url') as mock:
        instance = Mock()
        instance.is_open = True
        instance.get_settings.return_value = {
            'baudrate': 9600,
            'bytesize': 8,
            'parity': 'N',
            'stopbits': 1,
            'xonxoff': False,
            'dsrdtr': False,
            'rtscts': False,
            'timeout': None,
            'write_timeout': None,
            'inter_byte_timeout': None,
        }
        instance.read.return_value = b""
        instance.write.side_effect = lambda data: len(data)
        instance.close.return_value = None
        mock.return_value = instance
        yield instance


@pytest.fixture
def serial_for_url():
    """Patch the pyserial opener and hand the patch to the test."""
    with patch('serial.serial_for_url') as mock:
        yield mock


@pytest.fixture
def transport():
    """Fresh, unopened transport."""
    return SerialTransport()


@pytest.fixture
def open_transport(transport, mock_serial):
    """Transport opened on a mock port at 9600 8N1."""
    assert transport.open('COM1', 9600) == 0
    return transport
