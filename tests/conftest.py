import logging
import sys
from pathlib import Path

import pytest

# Ensure the project root is available on the Python path when running the tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def restore_package_logger_level():
    logger = logging.getLogger("openinghours")
    level = logger.level
    yield
    logger.setLevel(level)
