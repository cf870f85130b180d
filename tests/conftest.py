import pytest

from tabular.log import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Ensure each test starts with a clean logger so caplog sees library records."""
    reset_logging()
    yield
    reset_logging()
