import pytest
import structlog

from tessera.logging import close_sinks
from tessera.tokens import ExpiringPayload

FIXED_NOW = 1_700_000_000


class SessionPayload(ExpiringPayload):
    user_id: str
    data: str = ""


@pytest.fixture
def now() -> int:
    """A fixed verification clock (Unix seconds)."""
    return FIXED_NOW


@pytest.fixture
def secret() -> str:
    return "s3cret"


@pytest.fixture
def payload_type() -> type[SessionPayload]:
    return SessionPayload


@pytest.fixture
def payload(now) -> SessionPayload:
    return SessionPayload(user_id="u1", exp=now + 10, data="x")


@pytest.fixture
def restore_logging():
    """Return structlog to its unconfigured defaults after a test configures it."""
    yield
    close_sinks()
    structlog.reset_defaults()
