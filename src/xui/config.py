"""Runtime configuration for the x-ui panel.

Build identity, logging level, filesystem locations and database connection
settings, all resolved from ``XUI_*`` environment variables with
platform-specific defaults.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from importlib.resources import files
from pathlib import Path

logger = logging.getLogger(__name__)

# Build identity, shipped as package data next to this module
_version: str = files("xui").joinpath("version").read_text(encoding="utf-8")
_name: str = files("xui").joinpath("name").read_text(encoding="utf-8")

LEGACY_DB_FOLDER = "/etc/x-ui"
DEFAULT_LOG_FOLDER = "/var/log"
WINDOWS_LOG_FOLDER = "./log"
DEFAULT_BIN_FOLDER = "bin"
DB_EXTENSION = ".db"

MYSQL = "mysql"
MYSQL_DEFAULT_PORT = "3306"

# Executable directories that indicate a throwaway build or extraction location
_EPHEMERAL_DIR_MARKERS = ("/appdata/local/temp/", "/go-build")


class LogLevel(str, Enum):
    """Logging levels understood by the panel."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"


class DatabaseConfigError(ValueError):
    """Raised when the database environment is incomplete."""


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection settings read from the environment."""

    connection: str
    host: str
    port: str
    database: str
    username: str
    password: str


@dataclass(frozen=True)
class ResolvedPath:
    """A resolved directory and where it came from.

    ``source`` is ``"executable"``, ``"cwd"`` or ``"fallback"``.
    """

    path: str
    source: str


class MigrationOutcome(Enum):
    """Result of the legacy database migration."""

    SKIPPED_PLATFORM = "skipped_platform"
    SKIPPED_OVERRIDE = "skipped_override"
    NEW_EXISTS = "new_exists"
    OLD_MISSING = "old_missing"
    COPIED = "copied"
    FAILED = "failed"


def _is_windows(platform: str | None = None) -> bool:
    return (platform or sys.platform).startswith("win")


def get_version() -> str:
    """Return the version string of the application."""
    return _version.strip()


def get_name() -> str:
    """Return the name of the application."""
    return _name.strip()


def is_debug() -> bool:
    """Check whether debug mode is enabled via ``XUI_DEBUG``."""
    return os.getenv("XUI_DEBUG") == "true"


def get_log_level() -> LogLevel | str:
    """Return the configured log level.

    Debug mode always wins. Otherwise ``XUI_LOG_LEVEL`` is returned as-is,
    without checking it against :class:`LogLevel`, or ``info`` when unset.
    """
    if is_debug():
        return LogLevel.DEBUG
    log_level = os.getenv("XUI_LOG_LEVEL", "")
    if not log_level:
        return LogLevel.INFO
    return log_level


def get_bin_folder_path() -> str:
    """Return the binary folder, defaulting to ``bin``."""
    return os.getenv("XUI_BIN_FOLDER") or DEFAULT_BIN_FOLDER


def _is_ephemeral_dir(path: str) -> bool:
    normalized = path.replace("\\", "/").lower()
    return any(marker in normalized for marker in _EPHEMERAL_DIR_MARKERS)


def resolve_base_dir() -> ResolvedPath:
    """Resolve the directory of the running executable.

    When the executable lives in a temporary build or extraction directory,
    the current working directory is used instead. Failures fall back to ``.``.

    Returns:
        ResolvedPath with the directory and the source it was taken from.
    """
    exe_path = sys.executable
    if not exe_path:
        return ResolvedPath(path=".", source="fallback")

    # A bare executable name has no directory part
    exe_dir = os.path.dirname(exe_path) or "."
    if _is_ephemeral_dir(exe_dir):
        try:
            return ResolvedPath(path=os.getcwd(), source="cwd")
        except OSError:
            return ResolvedPath(path=".", source="fallback")

    return ResolvedPath(path=exe_dir, source="executable")


def get_database_config() -> DatabaseConfig:
    """Build the database configuration from ``XUI_DB_*`` variables.

    Returns:
        A new DatabaseConfig. For MySQL the port defaults to 3306.

    Raises:
        DatabaseConfigError: If MySQL is selected and host, database or
            username is missing.
    """
    connection = os.getenv("XUI_DB_CONNECTION", "").lower()
    host = os.getenv("XUI_DB_HOST", "")
    port = os.getenv("XUI_DB_PORT", "")
    database = os.getenv("XUI_DB_DATABASE", "")
    username = os.getenv("XUI_DB_USERNAME", "")
    password = os.getenv("XUI_DB_PASSWORD", "")

    if connection == MYSQL:
        if not host or not database or not username:
            raise DatabaseConfigError(
                "missing required MySQL configuration: "
                "host, database, and username are required"
            )
        if not port:
            port = MYSQL_DEFAULT_PORT

    return DatabaseConfig(
        connection=connection,
        host=host,
        port=port,
        database=database,
        username=username,
        password=password,
    )


def get_db_folder_path(platform: str | None = None) -> str:
    """Return the database folder from ``XUI_DB_FOLDER`` or the platform default."""
    db_folder_path = os.getenv("XUI_DB_FOLDER", "")
    if db_folder_path:
        return db_folder_path
    if _is_windows(platform):
        return resolve_base_dir().path
    return LEGACY_DB_FOLDER


def _sqlite_path(folder: str) -> str:
    return f"{folder}/{get_name()}{DB_EXTENSION}"


def require_database_config() -> DatabaseConfig:
    """Return the database configuration, exiting the process if it is invalid."""
    try:
        return get_database_config()
    except DatabaseConfigError as exc:
        logger.error("Error getting database config: %s", exc)
        sys.exit(1)


def get_db_path(platform: str | None = None) -> str:
    """Return the MySQL DSN or the SQLite file path.

    An invalid database configuration is fatal: the error is logged and
    the process exits.
    """
    return format_db_path(require_database_config(), platform)


def format_db_path(db_config: DatabaseConfig, platform: str | None = None) -> str:
    """Format the DSN or SQLite file path for an already resolved configuration."""
    if db_config.connection == MYSQL:
        return (
            f"{db_config.username}:{db_config.password}"
            f"@tcp({db_config.host}:{db_config.port})/{db_config.database}"
            "?charset=utf8mb4&parseTime=True&loc=Local"
        )

    return _sqlite_path(get_db_folder_path(platform))


def get_log_folder(platform: str | None = None) -> str:
    """Return the log folder from ``XUI_LOG_FOLDER`` or the platform default."""
    log_folder_path = os.getenv("XUI_LOG_FOLDER", "")
    if log_folder_path:
        return log_folder_path
    if _is_windows(platform):
        return WINDOWS_LOG_FOLDER
    return DEFAULT_LOG_FOLDER


def _copy_file(src: Path, dst: Path) -> None:
    with src.open("rb") as in_handle, dst.open("wb") as out_handle:
        while True:
            chunk = in_handle.read(1024 * 1024)
            if not chunk:
                break
            out_handle.write(chunk)
        out_handle.flush()
        os.fsync(out_handle.fileno())


def migrate_legacy_db(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> MigrationOutcome:
    """Copy the database from its legacy Windows location, once.

    Older Windows builds kept the database under ``/etc/x-ui``. When the
    database folder is not overridden, the new location is next to the
    executable. An existing database at the new location is never
    overwritten, and copy failures are logged but not raised.

    Args:
        platform: Platform string, defaults to ``sys.platform``.
        environ: Environment mapping, defaults to ``os.environ``.

    Returns:
        MigrationOutcome describing what happened.
    """
    if environ is None:
        environ = os.environ

    if not _is_windows(platform):
        return MigrationOutcome.SKIPPED_PLATFORM
    if environ.get("XUI_DB_FOLDER"):
        return MigrationOutcome.SKIPPED_OVERRIDE

    # Without an override the new folder is always the Windows default
    old_db_path = Path(_sqlite_path(LEGACY_DB_FOLDER))
    new_db_path = Path(_sqlite_path(resolve_base_dir().path))

    if new_db_path.exists():
        return MigrationOutcome.NEW_EXISTS
    if not old_db_path.exists():
        return MigrationOutcome.OLD_MISSING

    try:
        _copy_file(old_db_path, new_db_path)
    except OSError as exc:
        logger.warning("Failed to migrate database from %s: %s", old_db_path, exc)
        return MigrationOutcome.FAILED

    logger.info("Migrated database from %s to %s", old_db_path, new_db_path)
    return MigrationOutcome.COPIED


def describe_config(platform: str | None = None) -> dict[str, object]:
    """Return a snapshot of the resolved configuration without secrets.

    Raises:
        DatabaseConfigError: If the MySQL configuration is incomplete.
    """
    db_config = get_database_config()
    log_level = get_log_level()
    return {
        "name": get_name(),
        "version": get_version(),
        "log_level": log_level.value if isinstance(log_level, LogLevel) else log_level,
        "debug": is_debug(),
        "bin_folder": get_bin_folder_path(),
        "db_folder": get_db_folder_path(platform),
        "log_folder": get_log_folder(platform),
        "database": {
            "connection": db_config.connection or "sqlite",
            "host": db_config.host,
            "port": db_config.port,
            "database": db_config.database,
            "username": db_config.username,
        },
    }
