# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for intake limits, blob storage, database
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the intake pipeline and its external collaborators.
Every value can be overridden through an environment variable.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides via from_env()
- One cached Defaults instance per process (reset_defaults() for tests)
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from core.contracts import ALLOWED_CONTENT_TYPES


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class IntakeDefaults:
    """
    Defaults for submission handling.

    Controls per-file size ceiling, accepted content types and whether
    blobs left behind by a failed submission are removed.
    """
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB per file
    allowed_content_types: FrozenSet[str] = ALLOWED_CONTENT_TYPES
    cleanup_orphaned_blobs: bool = False

    @property
    def max_file_size_mb(self) -> float:
        return self.max_file_size_bytes / (1024 * 1024)

    def is_allowed_type(self, content_type: Optional[str]) -> bool:
        """Check a MIME type against the allowed set (parameters ignored)."""
        if not content_type:
            return False
        base_type = content_type.split(";")[0].strip().lower()
        return base_type in self.allowed_content_types

    @classmethod
    def from_env(cls) -> "IntakeDefaults":
        """Create from environment variables."""
        return cls(
            max_file_size_bytes=int(os.getenv("INTAKE_MAX_FILE_SIZE_BYTES", 10 * 1024 * 1024)),
            cleanup_orphaned_blobs=_env_bool("INTAKE_CLEANUP_ORPHANED_BLOBS"),
        )


@dataclass(frozen=True)
class StorageDefaults:
    """
    Defaults for Azure Blob Storage.

    Either account_name (credential-based auth) or connection_string
    (local Azurite, account keys) must be set for uploads to work.
    """
    account_name: Optional[str] = None
    container: str = "govservice-2024"
    connection_string: Optional[str] = None
    public_base_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StorageDefaults":
        """Create from environment variables."""
        return cls(
            account_name=os.getenv("INTAKE_STORAGE_ACCOUNT"),
            container=os.getenv("INTAKE_STORAGE_CONTAINER", "govservice-2024"),
            connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
            public_base_url=os.getenv("INTAKE_PUBLIC_BASE_URL"),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """Defaults for the PostgreSQL document store."""
    schema: str = "intake"
    table: str = "submissions"
    pool_min_size: int = 1
    pool_max_size: int = 10
    auto_bootstrap_schema: bool = False

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            schema=os.getenv("INTAKE_DB_SCHEMA", "intake"),
            pool_min_size=int(os.getenv("DB_POOL_MIN_SIZE", 1)),
            pool_max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
            auto_bootstrap_schema=_env_bool("AUTO_BOOTSTRAP_SCHEMA"),
        )


@dataclass(frozen=True)
class ServerDefaults:
    """Defaults for the HTTP server process."""
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "ServerDefaults":
        """Create from environment variables."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 3000)),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    intake: IntakeDefaults = field(default_factory=IntakeDefaults)
    storage: StorageDefaults = field(default_factory=StorageDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    server: ServerDefaults = field(default_factory=ServerDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            intake=IntakeDefaults.from_env(),
            storage=StorageDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            server=ServerDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "IntakeDefaults",
    "StorageDefaults",
    "DatabaseDefaults",
    "ServerDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
