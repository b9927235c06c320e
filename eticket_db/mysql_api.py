from contextlib import contextmanager
from logging import getLogger

from mysql.connector import Error as MySQLError

from .config import MysqlSettings
from .connection_pool import PooledConnection, get_pool_manager

logger = getLogger(__name__)


class MySQLApi:
    def __init__(self, database: str, mysql_settings: MysqlSettings):
        self.database = database
        self.mysql_settings = mysql_settings
        self.pool_manager = get_pool_manager()
        self.connection_pool = self.pool_manager.get_or_create_pool(
            mysql_settings=mysql_settings,
            database=database,
        )
        logger.info(
            f"MySQLApi initialized with database '{database}' "
            f"using connection pool '{mysql_settings.pool_name}'"
        )

    @contextmanager
    def get_connection(self):
        """Get a connection from the pool with automatic cleanup"""
        with PooledConnection(self.connection_pool) as (connection, cursor):
            yield connection, cursor

    def execute(self, command, args=None, commit=False) -> int:
        logger.debug(f"Executing: {command} args={args}")
        with self.get_connection() as (connection, cursor):
            if args:
                cursor.execute(command, args)
            else:
                cursor.execute(command)
            if commit:
                connection.commit()
            return cursor.rowcount

    def fetch_all(self, query, args=None):
        """Run a SELECT and return (column_names, rows)"""
        logger.debug(f"Querying: {query} args={args}")
        with self.get_connection() as (connection, cursor):
            if args:
                cursor.execute(query, args)
            else:
                cursor.execute(query)
            rows = cursor.fetchall()
            column_names = [d[0] for d in cursor.description or []]
            return column_names, rows

    def run_in_transaction(self, statements) -> int:
        """Execute [(sql, args), ...] atomically, returning the total rowcount.

        The first failing statement rolls back everything executed so far and
        its error is re-raised, even when the rollback itself fails.
        """
        total = 0
        with self.get_connection() as (connection, cursor):
            connection.start_transaction()
            try:
                for command, args in statements:
                    cursor.execute(command, args)
                    total += cursor.rowcount
                connection.commit()
            except Exception:
                logger.warning(f"Rolling back transaction after {total} row(s)")
                try:
                    connection.rollback()
                except MySQLError as rollback_error:
                    logger.error(f"Rollback error: {rollback_error}")
                raise
        return total

    def get_tables(self):
        with self.get_connection() as (connection, cursor):
            cursor.execute("SHOW FULL TABLES")
            res = cursor.fetchall()
            return [x[0] for x in res if x[1] == "BASE TABLE"]

    def ping(self) -> str:
        with self.get_connection() as (connection, cursor):
            cursor.execute("SELECT VERSION()")
            return cursor.fetchone()[0]

    def close(self):
        """Close method for compatibility - pool handles connection lifecycle"""
        logger.debug("MySQLApi.close() called - connection pool will handle cleanup")
