"""
Менеджер базы данных управляемого бэкенда

Табличный интерфейс к Postgres бэкенда: выборки, вставки и обновления строк,
вызов серверных функций (генерация кодов бронирования) и транзакции.
Использует Singleton паттерн для единого подключения.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor
from loguru import logger

from config.settings import DatabaseConfig
from core.exceptions import DatabaseConnectionError, DatabaseQueryError

Query = Union[str, sql.Composable]


class DatabaseManager:
    """
    Менеджер базы данных (Singleton)

    Управляет подключением и выполнением запросов. Вне транзакции каждый
    запрос фиксируется сразу; внутри ``transaction()`` фиксация выполняется
    один раз при выходе из блока.
    """

    _instance: Optional['DatabaseManager'] = None
    _connection: Optional[psycopg2.extensions.connection] = None

    def __new__(cls, config: Optional[DatabaseConfig] = None):
        """
        Реализация Singleton паттерна

        Args:
            config: Конфигурация базы данных (используется только при первом создании)
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = config
            cls._instance._connection = None
            cls._instance._transaction_depth = 0
        return cls._instance

    def connect(self) -> None:
        """
        Установка подключения к базе данных

        Raises:
            DatabaseConnectionError: Если не удалось подключиться
        """
        if self._connection and not self._connection.closed:
            logger.debug("Подключение к БД уже установлено")
            return

        if not self._config:
            raise DatabaseConnectionError("Конфигурация БД не задана")

        try:
            self._connection = psycopg2.connect(
                host=self._config.host,
                database=self._config.database,
                user=self._config.user,
                password=self._config.password,
                port=self._config.port,
                sslmode=self._config.sslmode,
                cursor_factory=RealDictCursor
            )
            self._connection.autocommit = False
            logger.info(f"Успешное подключение к БД: {self._config.database}@{self._config.host}")
        except psycopg2.OperationalError as e:
            error_msg = f"Ошибка подключения к БД {self._config.database}: {e}"
            logger.error(error_msg)
            raise DatabaseConnectionError(error_msg) from e

    def disconnect(self) -> None:
        """Закрытие подключения к базе данных"""
        if self._connection and not self._connection.closed:
            self._connection.close()
            logger.info("Подключение к БД закрыто")
        self._connection = None

    def is_connected(self) -> bool:
        """Проверка наличия активного подключения"""
        return self._connection is not None and not self._connection.closed

    @property
    def in_transaction(self) -> bool:
        return self._transaction_depth > 0

    def _require_connection(self) -> None:
        if not self.is_connected():
            raise DatabaseConnectionError("Нет подключения к БД")

    def _commit(self) -> None:
        if not self.in_transaction:
            self._connection.commit()

    def _rollback(self) -> None:
        if not self.in_transaction:
            self._connection.rollback()

    def _fetch(self, query: Query, params: Optional[Tuple]) -> List[Dict[str, Any]]:
        """Выполнение запроса, возвращающего строки, с фиксацией вне транзакции"""
        self._require_connection()
        try:
            with self._connection.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                rows = [dict(row) for row in cursor.fetchall()]
            self._commit()
            return rows
        except psycopg2.Error as e:
            self._rollback()
            error_msg = f"Ошибка выполнения запроса к БД: {e}"
            logger.error(error_msg)
            raise DatabaseQueryError(error_msg) from e

    def execute_query(
        self,
        query: Query,
        params: Optional[Tuple] = None
    ) -> List[Dict[str, Any]]:
        """
        Выполнение SELECT запроса (или запроса с RETURNING)

        Args:
            query: SQL запрос
            params: Параметры запроса

        Returns:
            Список строк в виде словарей

        Raises:
            DatabaseQueryError: Если произошла ошибка при выполнении запроса
        """
        rows = self._fetch(query, params)
        logger.debug(f"Выполнен запрос, возвращено {len(rows)} строк")
        return rows

    def execute_update(
        self,
        query: Query,
        params: Optional[Tuple] = None
    ) -> int:
        """
        Выполнение INSERT/UPDATE/DELETE запроса без возврата строк

        Returns:
            Количество затронутых строк
        """
        self._require_connection()
        try:
            with self._connection.cursor() as cursor:
                cursor.execute(query, params)
                affected_rows = cursor.rowcount
            self._commit()
            logger.debug(f"Выполнен UPDATE запрос, затронуто строк: {affected_rows}")
            return affected_rows
        except psycopg2.Error as e:
            self._rollback()
            error_msg = f"Ошибка выполнения UPDATE запроса к БД: {e}"
            logger.error(error_msg)
            raise DatabaseQueryError(error_msg) from e

    def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Вставка одной строки

        Returns:
            Вставленная строка со значениями по умолчанию сервера (id, даты)
        """
        if not values:
            raise DatabaseQueryError(f"Пустой набор полей для вставки в {table}")

        columns = list(values.keys())
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *").format(
            table=sql.Identifier(table),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            placeholders=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        rows = self._fetch(query, tuple(values[c] for c in columns))
        if not rows:
            raise DatabaseQueryError(f"Вставка в {table} не вернула строку")
        logger.debug(f"Вставлена строка в {table}: id={rows[0].get('id')}")
        return rows[0]

    def update(
        self,
        table: str,
        values: Dict[str, Any],
        where: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """
        Частичное обновление строк, совпадающих по равенству полей ``where``

        Returns:
            Обновленные строки
        """
        if not values:
            raise DatabaseQueryError(f"Пустой набор полей для обновления {table}")
        if not where:
            raise DatabaseQueryError(f"Обновление {table} без условия запрещено")

        set_columns = list(values.keys())
        where_columns = list(where.keys())
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE {conditions} RETURNING *").format(
            table=sql.Identifier(table),
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(c), sql.Placeholder()) for c in set_columns
            ),
            conditions=sql.SQL(" AND ").join(
                sql.SQL("{} = {}").format(sql.Identifier(c), sql.Placeholder()) for c in where_columns
            ),
        )
        params = tuple(values[c] for c in set_columns) + tuple(where[c] for c in where_columns)
        rows = self._fetch(query, params)
        logger.debug(f"Обновлено строк в {table}: {len(rows)}")
        return rows

    def call_function(self, name: str, *args: Any) -> Any:
        """Вызов серверной функции (RPC), возвращающей скалярное значение"""
        query = sql.SQL("SELECT {function}({arguments}) AS result").format(
            function=sql.Identifier(name),
            arguments=sql.SQL(", ").join(sql.Placeholder() for _ in args),
        )
        rows = self._fetch(query, tuple(args) or None)
        result = rows[0].get("result") if rows else None
        logger.debug(f"Вызвана функция {name}: {result}")
        return result

    @contextmanager
    def transaction(self) -> Iterator['DatabaseManager']:
        """
        Транзакция: все запросы внутри блока фиксируются вместе.

        Вложенные блоки присоединяются к внешней транзакции.
        """
        self._require_connection()
        self._transaction_depth += 1
        try:
            yield self
        except Exception:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self._connection.rollback()
                logger.warning("Транзакция отменена")
            raise
        else:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self._connection.commit()
                logger.debug("Транзакция зафиксирована")

    @classmethod
    def get_instance(cls) -> Optional['DatabaseManager']:
        """Получение экземпляра Singleton"""
        return cls._instance
