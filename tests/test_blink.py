import io

import pytest

from arduserial.blink import LED_OFF, LED_ON, auto_connect, receive_data, write_data
from arduserial.serialport import SerialPort, SerialPortError


class _Stop(Exception):
    pass


class _FakePort:
    def __init__(self, checks, incoming=b"", fail_write=False):
        self.checks = checks
        self.incoming = incoming
        self.fail_write = fail_write
        self.writes = []
        self.closed = False

    def is_connected(self):
        if self.closed or self.checks <= 0:
            return False
        self.checks -= 1
        return True

    def write(self, data):
        if self.fail_write:
            raise SerialPortError("gone")
        self.writes.append(data)
        return len(data)

    def read(self, size=255):
        data, self.incoming = self.incoming[:size], self.incoming[size:]
        return data

    def close(self):
        self.closed = True


class _ClosingAfterOff:
    """Wraps a real port and closes it once the LED has been switched off."""

    def __init__(self, inner):
        self.inner = inner
        self.writes = []

    def is_connected(self):
        return self.inner.is_connected()

    def write(self, data):
        self.writes.append(data)
        count = self.inner.write(data)
        if data == LED_OFF:
            self.inner.close()
        return count

    def read(self, size=255):
        return self.inner.read(size)

    def close(self):
        self.inner.close()


def _opener(results):
    calls = []

    def opener(name):
        calls.append(name)
        item = results.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return opener, calls


@pytest.fixture
def port():
    with SerialPort("loop://", settle_time=0) as p:
        yield p


def test_write_data_sends_on_then_off(port):
    write_data(port, delay=0)
    assert port.read() == b"ON\nOFF\n"


def test_receive_data_echoes(port):
    port.write(b"hello")
    out = io.StringIO()
    assert receive_data(port, out) == "hello"
    assert out.getvalue() == "hello"


def test_receive_data_with_nothing(port):
    out = io.StringIO()
    assert receive_data(port, out) == ""
    assert out.getvalue() == ""


def test_auto_connect_retries_and_blinks():
    fake = _FakePort(checks=2)
    opener, calls = _opener([SerialPortError("missing"), fake, _Stop()])
    out = io.StringIO()
    with pytest.raises(_Stop):
        auto_connect("COM9", send=True, delay=0, out=out, opener=opener)
    assert fake.writes == [LED_ON, LED_OFF]
    assert fake.closed is True
    assert calls == ["COM9", "COM9", "COM9"]
    assert out.getvalue() == (
        "Searching in progress.\nConnection established at port COM9\n"
        "Searching in progress."
    )


def test_auto_connect_receive_mode_prints_incoming():
    fake = _FakePort(checks=2, incoming=b"data")
    opener, _ = _opener([fake, _Stop()])
    out = io.StringIO()
    with pytest.raises(_Stop):
        auto_connect("COM9", send=False, delay=0, out=out, opener=opener)
    assert "Connection established at port COM9\ndata" in out.getvalue()
    assert fake.writes == []


def test_auto_connect_reconnects_after_write_failure():
    broken = _FakePort(checks=5, fail_write=True)
    healthy = _FakePort(checks=2)
    opener, calls = _opener([broken, healthy, _Stop()])
    with pytest.raises(_Stop):
        auto_connect("COM9", send=True, delay=0, out=io.StringIO(), opener=opener)
    assert broken.closed is True
    assert healthy.writes == [LED_ON, LED_OFF]
    assert len(calls) == 3


def test_auto_connect_with_loop_port_blinks():
    wrapper = _ClosingAfterOff(SerialPort("loop://", settle_time=0))
    opener, calls = _opener([wrapper, _Stop()])
    out = io.StringIO()
    with pytest.raises(_Stop):
        auto_connect("loop://", send=True, delay=0, out=out, opener=opener)
    assert calls == ["loop://", "loop://"]
    assert wrapper.writes == [LED_ON, LED_OFF]
    assert wrapper.inner.is_connected() is False
    assert "Connection established at port loop://\n" in out.getvalue()