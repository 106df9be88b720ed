import pytest

from wms.infrastructure.settings import get_settings
from wms.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _isolate_process_state():
    yield
    reset_logging()
    get_settings.cache_clear()
