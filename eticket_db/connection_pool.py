"""MySQL connection pool manager for the e-ticket console"""

import hashlib
import threading
from logging import getLogger

from mysql.connector import Error as MySQLError
from mysql.connector.pooling import MySQLConnectionPool

from .config import MysqlSettings

logger = getLogger(__name__)


class ConnectionPoolManager:
    """Singleton holding one pool per server/user/schema combination"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._pools = {}
            self._initialized = True

    @staticmethod
    def _short_pool_name(pool_key: str, prefix: str) -> str:
        # connector rejects pool names longer than 64 characters
        digest = hashlib.sha256(pool_key.encode("utf-8")).hexdigest()[:8]
        return f"{prefix[:16]}_{digest}"

    def get_or_create_pool(
        self,
        mysql_settings: MysqlSettings,
        database: str = None,
    ) -> MySQLConnectionPool:
        pool_key = (
            f"{mysql_settings.host}:{mysql_settings.port}:{mysql_settings.user}"
            f":{mysql_settings.pool_name}:{database or ''}"
        )

        if pool_key not in self._pools:
            with self._lock:
                if pool_key not in self._pools:
                    config = mysql_settings.get_connection_config(
                        database=database, autocommit=True,
                    )
                    short_name = self._short_pool_name(pool_key, mysql_settings.pool_name)
                    try:
                        self._pools[pool_key] = MySQLConnectionPool(
                            pool_name=short_name,
                            pool_size=mysql_settings.pool_size,
                            pool_reset_session=True,
                            **config,
                        )
                    except MySQLError as e:
                        logger.error(f"Failed to create connection pool '{pool_key}': {e}")
                        raise
                    logger.info(
                        f"Created MySQL connection pool '{short_name}' "
                        f"(key: '{pool_key}') with {mysql_settings.pool_size} connections"
                    )

        return self._pools[pool_key]

    def close_all_pools(self):
        with self._lock:
            for pool_key in self._pools:
                logger.debug(f"Dropping connection pool '{pool_key}'")
            self._pools.clear()


class PooledConnection:
    """Context manager for pooled MySQL connections"""

    def __init__(self, pool: MySQLConnectionPool):
        self.pool = pool
        self.connection = None
        self.cursor = None

    def __enter__(self):
        try:
            self.connection = self.pool.get_connection()
            self.cursor = self.connection.cursor()
            return self.connection, self.cursor
        except MySQLError as e:
            logger.error(f"Failed to get connection from pool: {e}")
            if self.connection is not None:
                self.connection.close()
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.cursor:
            self.cursor.close()
        if self.connection:
            # returns the connection to the pool
            self.connection.close()

        if exc_type is not None:
            logger.debug(f"Error in pooled connection: {exc_val}")


def get_pool_manager() -> ConnectionPoolManager:
    return ConnectionPoolManager()
