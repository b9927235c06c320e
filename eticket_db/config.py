"""
E-Ticket Database Configuration Management

This module provides configuration classes for connecting the e-ticket
console to its MySQL schema.

Classes:
    MysqlSettings: MySQL connection configuration with connection pooling
    Settings: Main configuration class loaded from YAML

Key Features:
    - YAML-based configuration loading
    - Environment variable overrides for credentials
    - Type validation and error handling
"""

import os
from dataclasses import dataclass

import yaml


def stype(obj):
    """Get the simple type name of an object.

    Example:
        >>> stype([1, 2, 3])
        'list'
    """
    return type(obj).__name__


@dataclass
class MysqlSettings:
    """MySQL connection configuration with connection pool support.

    Attributes:
        host: MySQL server hostname or IP address
        port: MySQL server port (default: 3306)
        user: MySQL username for authentication
        password: MySQL password for authentication
        pool_size: Number of connections kept in the pool (default: 2)
        pool_name: Identifier for connection pool (default: "eticket")
        charset: Character set for connection (optional)
        collation: Collation for connection (optional)
        connection_timeout: Seconds to wait when connecting (default: 10)
    """
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    pool_size: int = 2
    pool_name: str = "eticket"
    charset: str = None
    collation: str = None
    connection_timeout: int = 10

    def validate(self):
        if not isinstance(self.host, str):
            raise ValueError(f"mysql host should be string and not {stype(self.host)}")

        if not isinstance(self.port, int):
            raise ValueError(f"mysql port should be int and not {stype(self.port)}")

        if not isinstance(self.user, str):
            raise ValueError(f"mysql user should be string and not {stype(self.user)}")

        if not isinstance(self.password, str):
            raise ValueError(
                f"mysql password should be string and not {stype(self.password)}"
            )

        if not isinstance(self.pool_size, int) or self.pool_size < 1:
            raise ValueError(
                f"mysql pool_size should be positive integer and not {self.pool_size!r}"
            )

        if not isinstance(self.pool_name, str):
            raise ValueError(
                f"mysql pool_name should be string and not {stype(self.pool_name)}"
            )

        if self.charset is not None and not isinstance(self.charset, str):
            raise ValueError(
                f"mysql charset should be string or None and not {stype(self.charset)}"
            )

        if self.collation is not None and not isinstance(self.collation, str):
            raise ValueError(
                f"mysql collation should be string or None and not {stype(self.collation)}"
            )

        if not isinstance(self.connection_timeout, int):
            raise ValueError(
                f"mysql connection_timeout should be int and not {stype(self.connection_timeout)}"
            )

        if self.connection_timeout <= 0:
            raise ValueError("mysql connection_timeout should be at least 1 second")

    def apply_env_overrides(self, environ=None):
        environ = os.environ if environ is None else environ
        if 'MYSQL_HOST' in environ:
            self.host = environ['MYSQL_HOST']
        if 'MYSQL_PORT' in environ:
            try:
                self.port = int(environ['MYSQL_PORT'])
            except ValueError:
                raise ValueError(f"MYSQL_PORT should be int and not {environ['MYSQL_PORT']!r}")
        if 'MYSQL_USER' in environ:
            self.user = environ['MYSQL_USER']
        if 'MYSQL_PASSWORD' in environ:
            self.password = environ['MYSQL_PASSWORD']
        if 'MYSQL_CHARSET' in environ:
            self.charset = environ['MYSQL_CHARSET']

    def get_connection_config(self, database=None, autocommit=True):
        """Build standardized MySQL connection configuration"""
        config = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "autocommit": autocommit,
            "connection_timeout": self.connection_timeout,
        }

        if database is not None:
            config["database"] = database

        if self.charset is not None:
            config["charset"] = self.charset

        if self.collation is not None:
            config["collation"] = self.collation

        return config


class Settings:
    DEFAULT_LOG_LEVEL = "info"
    DEFAULT_ROW_SEPARATOR = " | "
    LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]

    def __init__(self):
        self.mysql = MysqlSettings()
        self.database = ""
        self.settings_file = ""
        self.log_level = Settings.DEFAULT_LOG_LEVEL
        self.row_separator = Settings.DEFAULT_ROW_SEPARATOR

    def load(self, settings_file, environ=None):
        environ = os.environ if environ is None else environ
        with open(settings_file, "r") as f:
            data = yaml.safe_load(f.read()) or {}

        if not isinstance(data, dict):
            raise ValueError(f"config root should be a mapping and not {stype(data)}")

        self.settings_file = settings_file
        self.mysql = MysqlSettings(**(data.pop("mysql", None) or {}))
        self.database = data.pop("database", "")
        self.log_level = data.pop("log_level", Settings.DEFAULT_LOG_LEVEL)
        self.row_separator = data.pop("row_separator", Settings.DEFAULT_ROW_SEPARATOR)

        if data:
            raise Exception(f"Unsupported config options: {list(data.keys())}")

        self.mysql.apply_env_overrides(environ)
        if 'ETICKET_DATABASE' in environ:
            self.database = environ['ETICKET_DATABASE']

        self.validate()

    def validate_log_level(self):
        if self.log_level not in Settings.LOG_LEVELS:
            raise ValueError(f"wrong log level {self.log_level}")

    def validate(self):
        self.mysql.validate()
        if not isinstance(self.database, str) or not self.database:
            raise ValueError(
                f"database should be a non-empty string and not {self.database!r}"
            )
        if not isinstance(self.row_separator, str):
            raise ValueError(
                f"row_separator should be string and not {stype(self.row_separator)}"
            )
        self.validate_log_level()
