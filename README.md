# arduserial

Small tools for exchanging text with an Arduino-style board over a serial port. The port is opened at 9600 baud by default, with 8 data bits, no parity and one stop bit. DTR is switched on when the port opens.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and then run `pytest`:

```
pip install ".[test]"
pytest
```

## Commands

### `arduserial-calc`

Use this with a sketch that evaluates an expression such as `5 * 5` and replies with the result. The command reads one expression per line from standard input and shows a prompt for each line. It sends the expression to the board with a trailing newline and waits briefly (`--delay`, 0.1 s by default). It then reads whatever the board has sent back and prints it as `Result: ...`.

Each reply is also appended to a results file, in the form `[YYYY-mm-dd HH:MM:SS] <reply>`. No newline is added, so the board's own line ending ends the entry. Enter `exit` to stop.

```
arduserial-calc --port /dev/ttyACM0
```

Options:

- `--port`: the serial port name or pyserial URL. The default is `COM3`.
- `--baudrate`: the baud rate. The default is 9600.
- `--results`: the file that replies are appended to. The default is `results.txt`.
- `--settle-time`: how many seconds to wait after opening the port. The default is 2.0.
- `--delay`: how many seconds to wait for each reply. The default is 0.1.

If the port cannot be opened, the command prints an error and exits with status 1. It does the same if the results file cannot be opened.

### `arduserial-blink`

This command keeps trying to open the port, printing a dot for every attempt, until it succeeds. Once connected, it writes `ON` and `OFF` lines over and over to blink an LED. It waits `--delay` seconds (1.0 by default) after each line.

With `--receive`, it prints whatever the board sends instead of blinking. If the connection drops, the command closes the port and goes back to searching. It runs until interrupted with Ctrl-C.

```
arduserial-blink --port /dev/ttyACM0
arduserial-blink --port /dev/ttyACM0 --receive
```

Options:

- `--port`: the default is `COM20`.
- `--baudrate`
- `--settle-time`
- `--delay`
- `--receive`

## Library use

```python
from arduserial.serialport import SerialPort, SerialPortError

try:
    with SerialPort("/dev/ttyACM0") as board:
        board.write(b"5 * 5\n")
        reply = board.read(255)
except SerialPortError as exc:
    print(f"could not use the board: {exc}")
```

`SerialPort(port_name, baudrate=9600, settle_time=2.0)` opens and configures the port. It raises `SerialPortError` if the port cannot be opened. After opening, it waits `settle_time` seconds, because many boards reset when the port is opened.

`port_name` may be a device name or any pyserial URL. For example, `loop://` gives a loopback port that is handy for testing.

- `read(size=255)` returns at most `size` bytes that are already waiting. It never blocks, and it returns `b""` when nothing is waiting.
- `write(data)` sends bytes or a UTF-8 encoded string and returns the number of bytes written.
- `is_connected()` reports whether the port is still open and usable.
- `close()` closes the port. Calling it more than once is safe.

Read and write failures raise `SerialPortError`.

The calculator loop is available as `arduserial.calculator.run_session(port, lines, results, out, delay)`. It returns the list of replies. `arduserial.calculator.get_timestamp(now=None)` formats a `datetime` or a POSIX timestamp as `YYYY-MM-DD HH:MM:SS`.

The blink module provides `write_data(port, delay)`, `receive_data(port, out)` and `auto_connect(port_name, send, delay, out, opener)`. The `opener` argument of `auto_connect` is the callable used to open the port.

## Limitations

The calculator command does not evaluate expressions itself. The board must do the arithmetic, and the command only relays the text and logs the reply.