import pytest

from fftplan import bootstrap


@pytest.fixture(scope="session", autouse=True)
def setup_fftplan() -> None:
    """Load provider plugins once for the entire test session."""

    bootstrap()
