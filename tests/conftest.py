import io

import pytest
from blessed.keyboard import Keystroke

import neurolink.renderer as renderer_mod
from neurolink.keyboard import InputSource
from neurolink.renderer import Renderer


class FakeTerm:
    """Stands in for ``blessed.Terminal`` when reading keys."""

    def __init__(self, keys=()):
        self.keys = list(keys)
        self.timeouts = []

    def inkey(self, timeout=None):
        self.timeouts.append(timeout)
        if self.keys:
            return self.keys.pop(0)
        return Keystroke("")


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Transitions and frame pacing run instantly under test."""
    slept = []
    monkeypatch.setattr(renderer_mod.time, "sleep", lambda s: slept.append(s))
    yield slept


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def renderer(stream):
    return Renderer(stream=stream)


@pytest.fixture
def fake_term():
    return FakeTerm()


@pytest.fixture
def keyboard(fake_term):
    return InputSource(term=fake_term, fd=None)
