import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Each test starts from structlog's defaults; BridgeLog reconfigures on open."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
