import pytest


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def _isolate_logging():
    """Drop handlers the CLI attaches so each test sees its own captured streams."""
    import logging

    yield
    logger = logging.getLogger("modelicafmt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
