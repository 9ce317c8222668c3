import pytest

from nunchuck_reader import (
    ConfigurationError,
    DeviceReadError,
    DeviceUnavailableError,
    ErrorKind,
    NunchuckReader,
    ReaderConfig,
    SessionMode,
)
from nunchuck_reader.mock_transport import FakeTransport
from nunchuck_reader.protocol import obfuscate_byte

REFERENCE_FRAME = [0x10, 0x20, 0x30, 0x40, 0x50, 0xC3]


# ---- construction ----

@pytest.mark.parametrize("delay", [0, 1, 299, -500])
@pytest.mark.parametrize("mode", [SessionMode.PLAIN, SessionMode.OBFUSCATED])
def test_short_delay_fails_before_any_bus_io(transport, sleep, mode, delay):
    with pytest.raises(ConfigurationError) as exc:
        NunchuckReader(mode, delay, transport=transport, sleep=sleep)
    assert exc.value.kind is ErrorKind.CONFIGURATION
    assert transport.ops == []
    assert sleep.calls == []


@pytest.mark.parametrize("delay", [float("nan"), float("inf"), None, "500", True])
def test_non_numeric_delay_fails_before_any_bus_io(transport, sleep, delay):
    with pytest.raises(ConfigurationError):
        NunchuckReader(SessionMode.PLAIN, delay, transport=transport, sleep=sleep)
    assert transport.ops == []
    assert sleep.calls == []


def test_failed_init_wait_releases_handle(transport):
    def broken_sleep(us):
        raise ValueError("sleep length is out of range")

    with pytest.raises(ValueError):
        NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=broken_sleep)
    assert transport.closed


@pytest.mark.parametrize("mode", ["plain", None, 1])
def test_unknown_mode_fails_before_any_bus_io(transport, sleep, mode):
    with pytest.raises(ConfigurationError):
        NunchuckReader(mode, transport=transport, sleep=sleep)
    assert transport.ops == []


@pytest.mark.parametrize("delay", [300, 500, 2000])
def test_plain_init_sequence(transport, sleep, delay):
    reader = NunchuckReader(SessionMode.PLAIN, delay, transport=transport, sleep=sleep)
    assert transport.ops == [
        ("open", 0x52),
        ("write_register", 0xF0, 0x55),
        ("write_register", 0xFB, 0x00),
    ]
    assert sleep.calls == [delay]
    assert reader.is_obfuscated() is False


@pytest.mark.parametrize("delay", [300, 500, 2000])
def test_obfuscated_init_sequence(transport, sleep, delay):
    reader = NunchuckReader(SessionMode.OBFUSCATED, delay, transport=transport, sleep=sleep)
    assert transport.ops == [
        ("open", 0x52),
        ("write_register", 0x40, 0x00),
    ]
    assert sleep.calls == [delay]
    assert reader.is_obfuscated() is True


def test_default_delay_is_500(transport, sleep):
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    assert reader.adaptation_delay_us == 500
    assert sleep.calls == [500]


def test_open_failure_raises_unavailable(sleep):
    transport = FakeTransport(fail_open=True)
    with pytest.raises(DeviceUnavailableError) as exc:
        NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    assert exc.value.status < 0
    assert transport.ops == [("open", 0x52)]
    assert sleep.calls == []


def test_init_write_failure_releases_handle(sleep):
    transport = FakeTransport(fail_register=0xF0)
    with pytest.raises(DeviceUnavailableError):
        NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    assert ("write_register", 0xFB, 0x00) not in transport.ops
    assert transport.closed
    assert sleep.calls == []


def test_from_config(transport, sleep):
    config = ReaderConfig(mode=SessionMode.OBFUSCATED, adaptation_delay_us=750)
    reader = NunchuckReader.from_config(config, transport=transport, sleep=sleep)
    assert reader.is_obfuscated()
    assert sleep.calls == [750]


def test_from_config_validates_first(transport, sleep):
    config = ReaderConfig(mode=SessionMode.PLAIN, adaptation_delay_us=100)
    with pytest.raises(ConfigurationError):
        NunchuckReader.from_config(config, transport=transport, sleep=sleep)
    assert transport.ops == []


def test_open_returns_result(transport, sleep):
    result = NunchuckReader.open(SessionMode.PLAIN, transport=transport, sleep=sleep)
    assert result.ok
    assert isinstance(result.unwrap(), NunchuckReader)

    result = NunchuckReader.open(SessionMode.PLAIN, 10, transport=transport, sleep=sleep)
    assert not result.ok
    assert result.error.kind is ErrorKind.CONFIGURATION
    with pytest.raises(ConfigurationError):
        result.unwrap()


# ---- read cycle ----

def test_read_cycle_order(transport, sleep):
    reader = NunchuckReader(SessionMode.PLAIN, 400, transport=transport, sleep=sleep)
    transport.ops.clear()
    sleep.calls.clear()

    reader.read_raw()

    assert transport.ops == [("write_byte", 0x00)] + [("read_byte",)] * 6
    assert sleep.calls == [400]


def test_read_raw_plain_reference_frame(sleep):
    transport = FakeTransport([REFERENCE_FRAME])
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    raw = reader.read_raw()
    assert (raw.joystick_x, raw.joystick_y) == (0x10, 0x20)
    assert (raw.accel_x, raw.accel_y, raw.accel_z) == (195, 256, 320)
    assert (raw.button_c, raw.button_z) == (1, 1)


def test_read_raw_obfuscated_decodes_wire_bytes(sleep):
    transport = FakeTransport()
    transport.queue_frame([0x00, 0xFF, 0x00, 0x00, 0x00, 0x00], encoded=True)
    reader = NunchuckReader(SessionMode.OBFUSCATED, transport=transport, sleep=sleep)
    raw = reader.read_raw()
    assert raw.joystick_x == 0x2E
    assert raw.joystick_y == 0xFF


def test_read_raw_obfuscated_matches_plain(sleep):
    # bytes below the key do not survive the unmasked decode, keep them >= 0x17
    frame = [0x90, 0x70, 0x30, 0x40, 0x50, 0xC3]
    plain = NunchuckReader(SessionMode.PLAIN, transport=FakeTransport([frame]), sleep=sleep)
    wire = [obfuscate_byte(b) for b in frame]
    transport = FakeTransport()
    transport.queue_frame(wire, encoded=True)
    obfuscated = NunchuckReader(SessionMode.OBFUSCATED, transport=transport, sleep=sleep)
    assert obfuscated.read_raw() == plain.read_raw()


def test_six_bytes_per_call_in_both_modes(sleep):
    for mode in SessionMode:
        transport = FakeTransport()
        reader = NunchuckReader(mode, transport=transport, sleep=sleep)
        for _ in range(3):
            reader.read_raw()
        assert len(transport.calls("read_byte")) == 18
        assert len(transport.calls("write_byte")) == 3


def test_read_error_aborts_cycle(sleep):
    transport = FakeTransport([REFERENCE_FRAME], fail_read_at=3)
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    transport.ops.clear()

    with pytest.raises(DeviceReadError) as exc:
        reader.read_raw()

    assert exc.value.byte_index == 3
    assert exc.value.status < 0
    assert exc.value.kind is ErrorKind.DEVICE_READ
    # bytes 0..3 requested, nothing after the failing one
    assert len(transport.calls("read_byte")) == 4


def test_read_error_leaves_reader_usable(sleep):
    transport = FakeTransport(fail_read_at=0)
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    with pytest.raises(DeviceReadError):
        reader.read_raw()

    transport.fail_read_at = None
    transport.queue_frame(REFERENCE_FRAME)
    assert reader.read_raw().accel_x == 195


def test_request_write_failure(sleep):
    transport = FakeTransport()
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    transport.fail_request = True
    transport.ops.clear()
    sleep.calls.clear()

    with pytest.raises(DeviceReadError):
        reader.read_raw()
    assert transport.calls("read_byte") == []
    assert sleep.calls == []


def test_try_read_raw(sleep):
    transport = FakeTransport([REFERENCE_FRAME], fail_read_at=4)
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)

    result = reader.try_read_raw()
    assert not result.ok
    assert result.value is None
    assert result.error.byte_index == 4

    transport.fail_read_at = None
    result = reader.try_read_raw()
    assert result.ok


def test_read_values(sleep):
    transport = FakeTransport([REFERENCE_FRAME])
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    data = reader.read_values()
    assert (data.joystick.x, data.joystick.y) == (0x10, 0x20)
    assert (data.accelerometer.x, data.accelerometer.y, data.accelerometer.z) == (195, 256, 320)
    assert data.button_c.pressed is False
    assert data.button_z.pressed is False


def test_try_read_values_idle_frame(transport, sleep):
    reader = NunchuckReader(SessionMode.OBFUSCATED, transport=transport, sleep=sleep)
    data = reader.try_read_values().unwrap()
    assert (data.joystick.x, data.joystick.y) == (128, 128)
    assert (data.accelerometer.x, data.accelerometer.y, data.accelerometer.z) == (512, 512, 716)
    assert not data.button_c.pressed
    assert not data.button_z.pressed


def test_mode_never_changes(sleep):
    transport = FakeTransport()
    reader = NunchuckReader(SessionMode.OBFUSCATED, transport=transport, sleep=sleep)
    for _ in range(3):
        reader.read_raw()
        assert reader.is_obfuscated()


# ---- release ----

def test_close_is_idempotent(transport, sleep):
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    reader.close()
    reader.close()
    assert transport.calls("close") == [("close", 3)]
    assert reader.closed


def test_read_after_close(transport, sleep):
    reader = NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep)
    reader.close()
    with pytest.raises(DeviceUnavailableError):
        reader.read_raw()


def test_context_manager_closes(transport, sleep):
    with NunchuckReader(SessionMode.PLAIN, transport=transport, sleep=sleep) as reader:
        reader.read_raw()
    assert transport.closed


def test_obfuscated_bytes_below_key_decode_past_eight_bits(sleep):
    transport = FakeTransport([[0x10, 0x80, 0x80, 0x80, 0x80, 0x03]])
    reader = NunchuckReader(SessionMode.OBFUSCATED, transport=transport, sleep=sleep)
    raw = reader.read_raw()
    assert raw.joystick_x == 0x110
    assert raw.joystick_y == 0x80
    assert (raw.button_c, raw.button_z) == (1, 1)
