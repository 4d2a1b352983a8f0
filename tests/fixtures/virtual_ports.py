"""
Fixtures for virtual serial port testing.
Provides mock serial devices for reliable testing without hardware.
"""
import pytest
import serial
import time

from unittest.mock import Mock


class _FakeSerial(Mock):
    """Mock serial port with real line settings bookkeeping."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.is_open = True
        self.timeout = None
        self.write_timeout = None
        self.inter_byte_timeout = None
        self.applied = None

    def get_settings(self):
        return {
            'baudrate': 9600,
            'bytesize': serial.EIGHTBITS,
            'parity': serial.PARITY_NONE,
            'stopbits': serial.STOPBITS_ONE,
        }

    def apply_settings(self, settings):
        self.applied = dict(settings)

    def close(self):
        self.is_open = False


@pytest.fixture
def mock_serial_config():
    """
    Provide standard line configuration for open().
    """
    return {
        'port': 'COM7',
        'baudrate': 115200,
        'bytesize': 8,
        'parity': 0,
        'stopbits': 0,
    }


@pytest.fixture
def simulated_serial_data():
    """
    Provide simulated serial data for testing.
    """
    return {
        'simple_response': b"OK\r\n",
        'multiline_response': b"Line 1\r\nLine 2\r\nLine 3\r\n",
        'binary_data': bytes(range(256)),
        'no_delimiter': b"NO DELIMITER HERE",
        'error_response': b"ERROR: Invalid command\r\n"
    }


@pytest.fixture
def serial_echo_server():
    """
    Mock serial port that echoes back received data.
    Useful for testing read/write operations.
    """
    class EchoSerial(_FakeSerial):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._input_buffer = bytearray()

        def write(self, data):
            # Echo data back to input buffer
            self._input_buffer.extend(data)
            return len(data)

        def read(self, size=1):
            data = bytes(self._input_buffer[:size])
            del self._input_buffer[:size]
            return data

    return EchoSerial()


@pytest.fixture
def serial_with_preloaded_data():
    """
    Mock serial port with preloaded data in buffer.
    """
    class PreloadedSerial(_FakeSerial):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._buffer = bytearray(b"PRELOADED_DATA:12345\r\nTAIL")
            self.reads = 0

        def read(self, size=1):
            self.reads += 1
            data = bytes(self._buffer[:size])
            del self._buffer[:size]
            return data

        def write(self, data):
            # Ignore writes, just return success
            return len(data)

    return PreloadedSerial()


@pytest.fixture
def stalled_serial_writer():
    """
    Mock serial port that accepts a few bytes and then times out.
    """
    class StalledSerial(_FakeSerial):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self.accepted = bytearray()
            self.limit = 3

        def write(self, data):
            if len(self.accepted) >= self.limit:
                raise serial.SerialTimeoutException('Write timeout')
            self.accepted.extend(data)
            return len(data)

    return StalledSerial()


@pytest.fixture
def slow_serial_writer():
    """
    Mock serial port that takes a fixed time per byte and honours
    write_timeout the way pyserial does.
    """
    class SlowSerial(_FakeSerial):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self.delays = [0.07, 0.5]
            self.seen_timeouts = []
            self.accepted = bytearray()

        def write(self, data):
            delay = self.delays.pop(0)
            self.seen_timeouts.append(self.write_timeout)
            if self.write_timeout is not None and delay > self.write_timeout:
                time.sleep(self.write_timeout)
                raise serial.SerialTimeoutException('Write timeout')
            time.sleep(delay)
            self.accepted.extend(data)
            return len(data)

    return SlowSerial()


@pytest.fixture(params=[9600, 115200, 230400, 460800, 921600])
def different_baudrates(request):
    """
    Parametrized fixture for testing different baud rates.
    """
    return request.param


@pytest.fixture(params=['/dev/ttyUSB0', '/dev/ttyACM0', 'COM1', 'COM3'])
def different_port_names(request):
    """
    Parametrized fixture for testing different port names.
    """
    return request.param
