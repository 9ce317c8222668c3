import pytest

from nunchuck_reader.mock_transport import FakeTransport


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, us):
        self.calls.append(us)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sleep():
    return SleepRecorder()
