"""
Общие фикстуры тестов
"""

from datetime import datetime
from unittest.mock import Mock

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def silence_logger():
    """Логи в тестах не нужны"""
    logger.remove()
    yield


@pytest.fixture
def mock_db_manager():
    """Мок менеджера БД"""
    db = Mock()
    db.execute_query = Mock(return_value=[])
    db.execute_update = Mock(return_value=0)
    db.insert = Mock(return_value={})
    db.update = Mock(return_value=[])
    db.call_function = Mock(return_value=None)
    return db


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 17, 10, 30)
