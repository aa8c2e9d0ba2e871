"""Interactive calculator that sends expressions to a board and logs its replies."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Iterable
from datetime import datetime
from typing import TextIO

from arduserial.serialport import (
    ARDUINO_WAIT_TIME,
    DEFAULT_BAUDRATE,
    MAX_DATA_LENGTH,
    SerialPort,
    SerialPortError,
)

DEFAULT_PORT = "COM3"
RESULTS_FILE = "results.txt"
PROMPT = "Enter a calculation (e.g., 5 * 5) or type 'exit' to exit and save the result: "
TIME_ERROR = "[Error getting time]"


def get_timestamp(now: datetime | float | None = None) -> str:
    """Format ``now`` (default: the current local time) as ``YYYY-MM-DD HH:MM:SS``."""
    if now is None:
        now = datetime.now()
    elif not isinstance(now, datetime):
        try:
            now = datetime.fromtimestamp(now)
        except (OverflowError, OSError, ValueError):
            return TIME_ERROR
    return now.strftime("%Y-%m-%d %H:%M:%S")


def run_session(
    port,
    lines: Iterable[str],
    results: TextIO,
    out: TextIO = sys.stdout,
    delay: float = 0.1,
) -> list[str]:
    """Send each line to ``port`` until ``exit``, logging every reply to ``results``.

    Returns the replies in order.
    """
    replies = []
    for line in lines:
        out.write(PROMPT)
        out.flush()
        expression = line.rstrip("\r\n")
        if expression == "exit":
            break
        port.write(expression + "\n")
        if delay > 0:
            time.sleep(delay)
        reply = port.read(MAX_DATA_LENGTH).decode("utf-8", errors="replace")
        reply = reply.split("\0", 1)[0]
        out.write(f"Result: {reply}\n")
        results.write(f"[{get_timestamp()}] {reply}")
        replies.append(reply)
    return replies


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="arduserial-calculator",
        description="Send calculations to a board over a serial port and log the results.",
    )
    parser.add_argument("--port", default=DEFAULT_PORT, help="serial port name or URL")
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE)
    parser.add_argument("--results", default=RESULTS_FILE, help="file the results are appended to")
    parser.add_argument("--settle-time", type=float, default=ARDUINO_WAIT_TIME)
    parser.add_argument("--delay", type=float, default=0.1, help="seconds to wait for a reply")
    args = parser.parse_args(argv)

    try:
        port = SerialPort(args.port, args.baudrate, args.settle_time)
    except SerialPortError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print(f"Failed to connect to Arduino on {args.port}")
        return 1

    with port:
        print(f"Connected to Arduino on {args.port}")
        try:
            results = open(args.results, "a", encoding="utf-8")
        except OSError:
            print("Could not open results file.", file=sys.stderr)
            return 1
        with results:
            run_session(port, sys.stdin, results, sys.stdout, args.delay)

    print(f"Exiting program. Results saved to {args.results}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())