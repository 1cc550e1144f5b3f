"""Global conftest for GeohashGrid tests."""

import logging
import os
from collections.abc import Generator

import pytest
from pytest import Item


def pytest_runtest_setup(item: Item) -> None:
    """Setup python encoding before `pytest_runtest_call(item)`."""
    os.environ["PYTHONIOENCODING"] = "utf-8"


@pytest.fixture(autouse=True)  # type: ignore
def restore_logging() -> Generator[None, None, None]:
    """Re-enable logging disabled by CLI runs."""
    yield
    logging.disable(logging.NOTSET)
