import pytest

from catalog.infrastructure.config import Settings
from catalog.infrastructure.logging_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging(tmp_path_factory):
    # Keeps structlog's default stdout printer out of captured CLI output.
    settings = Settings(
        data_dir=tmp_path_factory.mktemp("data"),
        environment="test",
        log_level="WARNING",
    )
    configure_logging(settings)
