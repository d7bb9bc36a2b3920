import pytest

from wildemit import Emitter
from wildemit.core.events import global_emitter


@pytest.fixture(autouse=True)
def _reset_global_emitter():
    """Isolation → every test gets a pristine global registry."""
    yield
    global_emitter.reset()


@pytest.fixture
def emitter():
    """Provides a fresh Emitter for each test and drains its worker pool."""
    em = Emitter()
    yield em
    em.close()
