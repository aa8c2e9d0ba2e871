"""Keep a board connected and blink its LED, or echo what it sends."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable
from typing import TextIO

from arduserial.serialport import (
    ARDUINO_WAIT_TIME,
    DEFAULT_BAUDRATE,
    MAX_DATA_LENGTH,
    SerialPort,
    SerialPortError,
)

DEFAULT_PORT = "COM20"
LED_ON = b"ON\n"
LED_OFF = b"OFF\n"
BLINKING_DELAY = 1.0
_RECEIVE_PAUSE = 0.01
_RETRY_INTERVAL = 0.1


def receive_data(port, out: TextIO = sys.stdout) -> str:
    """Print whatever the board has sent and return it."""
    text = port.read(MAX_DATA_LENGTH).decode("utf-8", errors="replace")
    out.write(text)
    out.flush()
    time.sleep(_RECEIVE_PAUSE)
    return text


def write_data(port, delay: float = BLINKING_DELAY) -> None:
    """Switch the LED on, wait, switch it off, wait."""
    port.write(LED_ON)
    time.sleep(delay)
    port.write(LED_OFF)
    time.sleep(delay)


def _try_open(opener: Callable, port_name: str):
    try:
        return opener(port_name)
    except SerialPortError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return None


def auto_connect(
    port_name: str,
    send: bool = True,
    delay: float = BLINKING_DELAY,
    out: TextIO = sys.stdout,
    opener: Callable = SerialPort,
) -> None:
    """Connect to ``port_name`` forever, reconnecting whenever the link drops.

    While connected, blink the LED when ``send`` is true, otherwise echo
    incoming data to ``out``.
    """
    port = _try_open(opener, port_name)
    while True:
        out.write("Searching in progress")
        out.flush()
        while port is None or not port.is_connected():
            time.sleep(_RETRY_INTERVAL)
            out.write(".")
            out.flush()
            port = _try_open(opener, port_name)

        out.write(f"\nConnection established at port {port_name}\n")
        out.flush()

        try:
            while port.is_connected():
                if send:
                    write_data(port, delay)
                else:
                    receive_data(port, out)
        except SerialPortError:
            pass
        port.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="arduserial-blink",
        description="Blink a board's LED over a serial port, or print what it sends.",
    )
    parser.add_argument("--port", default=DEFAULT_PORT, help="serial port name or URL")
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE)
    parser.add_argument("--settle-time", type=float, default=ARDUINO_WAIT_TIME)
    parser.add_argument("--delay", type=float, default=BLINKING_DELAY, help="blink interval in seconds")
    parser.add_argument("--receive", action="store_true", help="print incoming data instead of blinking")
    args = parser.parse_args(argv)

    def opener(name: str) -> SerialPort:
        return SerialPort(name, args.baudrate, args.settle_time)

    try:
        auto_connect(args.port, not args.receive, args.delay, sys.stdout, opener)
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())