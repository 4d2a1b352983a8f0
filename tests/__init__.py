"""
Test suite for serport - synchronous serial port transport.

This package contains unit tests, loopback integration tests, and test
fixtures for verifying serport without serial hardware.
"""
