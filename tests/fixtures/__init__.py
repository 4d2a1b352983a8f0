"""
Test fixtures for serport testing.

Provides mock serial devices and parametrized line settings for
comprehensive testing without hardware dependencies.
"""

from .virtual_ports import (
    mock_serial_config,
    simulated_serial_data,
    serial_echo_server,
    serial_with_preloaded_data,
    stalled_serial_writer,
    slow_serial_writer,
    different_baudrates,
    different_port_names,
)

__all__ = [
    'mock_serial_config',
    'simulated_serial_data',
    'serial_echo_server',
    'serial_with_preloaded_data',
    'stalled_serial_writer',
    'slow_serial_writer',
    'different_baudrates',
    'different_port_names',
]
