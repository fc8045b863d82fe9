"""Shared fixtures."""
import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def log_messages():
    """Route loguru output into a list for the duration of a test."""
    captured: list[str] = []
    logger.remove()
    logger.add(lambda msg: captured.append(str(msg).rstrip("\n")), level="DEBUG", format="{level} | {message}")
    yield captured
    logger.remove()
