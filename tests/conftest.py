import pytest

SAMPLE_CSV = "Code,P75\nA100,12.5\nA200,8.0\nB300,5.5\n"


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV.encode("utf-8")


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
