"""
Тесты менеджера базы данных (psycopg2 замокан)
"""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from config.settings import DatabaseConfig
from core.database import DatabaseManager
from core.exceptions import DatabaseConnectionError, DatabaseQueryError


@pytest.fixture
def connection():
    conn = MagicMock()
    conn.closed = False
    cursor = MagicMock()
    cursor.fetchall.return_value = [{'id': 1, 'full_name': 'Ahmad'}]
    cursor.rowcount = 3
    conn.cursor.return_value.__enter__.return_value = cursor
    conn.test_cursor = cursor
    return conn


@pytest.fixture
def db(connection):
    DatabaseManager._instance = None
    manager = DatabaseManager(DatabaseConfig(host="db.local", database="app"))
    with patch("core.database.psycopg2.connect", return_value=connection):
        manager.connect()
    yield manager
    DatabaseManager._instance = None


class TestConnection:
    def test_singleton(self, db):
        assert DatabaseManager() is db
        assert DatabaseManager.get_instance() is db

    def test_connect_error(self):
        DatabaseManager._instance = None
        manager = DatabaseManager(DatabaseConfig())
        with patch("core.database.psycopg2.connect", side_effect=psycopg2.OperationalError("refused")):
            with pytest.raises(DatabaseConnectionError):
                manager.connect()
        assert not manager.is_connected()
        DatabaseManager._instance = None

    def test_query_without_connection(self):
        DatabaseManager._instance = None
        manager = DatabaseManager(DatabaseConfig())
        with pytest.raises(DatabaseConnectionError):
            manager.execute_query("SELECT 1")
        DatabaseManager._instance = None

    def test_disconnect(self, db, connection):
        db.disconnect()
        connection.close.assert_called_once()
        assert not db.is_connected()


class TestQueries:
    def test_execute_query_commits(self, db, connection):
        rows = db.execute_query("SELECT * FROM leads WHERE id = %s", ("1",))

        assert rows == [{'id': 1, 'full_name': 'Ahmad'}]
        connection.test_cursor.execute.assert_called_once_with("SELECT * FROM leads WHERE id = %s", ("1",))
        connection.commit.assert_called_once()

    def test_query_error_rolls_back(self, db, connection):
        connection.test_cursor.execute.side_effect = psycopg2.Error("syntax error")

        with pytest.raises(DatabaseQueryError):
            db.execute_query("SELEC 1")

        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()

    def test_execute_update_returns_rowcount(self, db):
        assert db.execute_update("DELETE FROM leads WHERE id = %s", ("1",)) == 3

    def test_insert_params_and_row(self, db, connection):
        row = db.insert("leads", {"full_name": "Ahmad", "status": "new"})

        params = connection.test_cursor.execute.call_args[0][1]
        assert params == ("Ahmad", "new")
        assert row == {'id': 1, 'full_name': 'Ahmad'}

    def test_insert_without_values(self, db):
        with pytest.raises(DatabaseQueryError):
            db.insert("leads", {})

    def test_insert_without_returned_row(self, db, connection):
        connection.test_cursor.fetchall.return_value = []
        with pytest.raises(DatabaseQueryError):
            db.insert("leads", {"full_name": "Ahmad"})

    def test_update_params(self, db, connection):
        db.update("leads", {"status": "lost"}, {"id": "7"})
        params = connection.test_cursor.execute.call_args[0][1]
        assert params == ("lost", "7")

    def test_update_requires_where(self, db):
        with pytest.raises(DatabaseQueryError):
            db.update("leads", {"status": "lost"}, {})

    def test_call_function(self, db, connection):
        connection.test_cursor.fetchall.return_value = [{'result': 'UHT-2026-0001'}]
        assert db.call_function("generate_booking_code") == 'UHT-2026-0001'


class TestTransaction:
    def test_commit_once_at_end(self, db, connection):
        with db.transaction():
            db.insert("customers", {"full_name": "Ahmad"})
            db.update("leads", {"status": "won"}, {"id": "1"})
            assert db.in_transaction
            connection.commit.assert_not_called()

        connection.commit.assert_called_once()
        assert not db.in_transaction

    def test_rollback_on_error(self, db, connection):
        with pytest.raises(RuntimeError):
            with db.transaction():
                db.insert("customers", {"full_name": "Ahmad"})
                raise RuntimeError("step failed")

        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()
        assert not db.in_transaction

    def test_nested_blocks_join_outer(self, db, connection):
        with db.transaction():
            with db.transaction():
                db.insert("customers", {"full_name": "Ahmad"})
            connection.commit.assert_not_called()
        connection.commit.assert_called_once()
