import pytest
import structlog

from protowire.conf import ProtowireSettings

# route structlog through the standard logging module so that pytest captures the events
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.processors.KeyValueRenderer(key_order=['event']),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
)


@pytest.fixture
def shallow_settings() -> ProtowireSettings:
    """Settings with small limits, to exercise the limit checks without building huge inputs."""
    return ProtowireSettings(BYTES_MAX_LENGTH=16, MAX_RECURSION_DEPTH=4)
