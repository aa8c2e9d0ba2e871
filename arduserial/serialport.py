"""A serial connection to an Arduino-style board using 8N1 framing."""

from __future__ import annotations

import errno
import time

import serial

ARDUINO_WAIT_TIME = 2.0
MAX_DATA_LENGTH = 255
DEFAULT_BAUDRATE = 9600


class SerialPortError(Exception):
    """Raised when the serial port cannot be opened, read or written."""


class SerialPort:
    """An open serial port configured for 8 data bits, no parity, one stop bit.

    ``port_name`` may be a device name or any URL understood by pyserial
    (for example ``loop://``).
    """

    def __init__(
        self,
        port_name: str,
        baudrate: int = DEFAULT_BAUDRATE,
        settle_time: float = ARDUINO_WAIT_TIME,
    ) -> None:
        self.port_name = port_name
        self._connected = False
        try:
            self._serial = serial.serial_for_url(
                port_name,
                baudrate=baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=0,
            )
        except (OSError, ValueError) as exc:
            if getattr(exc, "errno", None) == errno.ENOENT:
                message = f"Handle was not attached. Reason: {port_name} not available"
            else:
                message = f"could not open {port_name}: {exc}"
            raise SerialPortError(message) from exc

        try:
            self._serial.dtr = True
            self._serial.reset_input_buffer()
            self._serial.reset_output_buffer()
        except (OSError, ValueError) as exc:
            self._serial.close()
            raise SerialPortError(
                f"could not set serial port parameters on {port_name}"
            ) from exc

        self._connected = True
        if settle_time > 0:
            # Boards typically reset when the port opens; give them time to boot.
            time.sleep(settle_time)

    def read(self, size: int = MAX_DATA_LENGTH) -> bytes:
        """Return up to ``size`` bytes that are already waiting, without blocking."""
        if size < 0:
            raise ValueError("size must not be negative")
        try:
            waiting = self._serial.in_waiting
            if waiting <= 0 or size == 0:
                return b""
            return bytes(self._serial.read(min(waiting, size)))
        except OSError as exc:
            raise SerialPortError(f"could not read from {self.port_name}: {exc}") from exc

    def write(self, data: bytes | str) -> int:
        """Send ``data`` and return the number of bytes written."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            written = self._serial.write(data)
        except OSError as exc:
            raise SerialPortError(f"could not write to {self.port_name}: {exc}") from exc
        return len(data) if written is None else written

    def is_connected(self) -> bool:
        """Report whether the port is still open and responding."""
        if not self._connected:
            return False
        try:
            self._serial.in_waiting
        except (OSError, ValueError):
            self._connected = False
        return self._connected

    def close(self) -> None:
        """Close the port; calling it again does nothing."""
        self._connected = False
        self._serial.close()

    def __enter__(self) -> SerialPort:
        return self

    def __exit__(self, *args) -> None:
        self.close()