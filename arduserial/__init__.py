"""Serial communication with Arduino-style boards: a port wrapper, a calculator client and a blink loop."""

__version__ = "0.1.0"
__all__ = ["blink", "calculator", "serialport"]