import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def restore_logger():
    """main() がシンクを差し替えるので、テストごとに既定のstderr出力へ戻す."""
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message))
