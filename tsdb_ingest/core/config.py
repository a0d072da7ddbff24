"""Module for configuration management."""

from typing import Any, Optional
from dynaconf import Dynaconf, Validator, ValidationError as DynaconfValidationError

from tsdb_ingest.core.constants import DEFAULT_DB_PATH, DEFAULT_FORMAT, DEFAULT_LOG_LEVEL
from tsdb_ingest.core.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class Settings:
    """Application settings using dynaconf.

    Values come from ``settings.yaml``/``.secrets.yaml`` when present and from
    ``TSDB_INGEST_``-prefixed environment variables, e.g.
    ``TSDB_INGEST_LOGGING__LEVEL=DEBUG``.
    """

    def __init__(self, settings_files: Optional[list] = None):
        """Initialize settings.

        Args:
            settings_files: Optional list of settings files to load

        Raises:
            ConfigError: If configuration initialization or validation fails
        """
        try:
            self.settings = Dynaconf(
                envvar_prefix="TSDB_INGEST",
                settings_files=settings_files or ['settings.yaml', '.secrets.yaml'],
                load_dotenv=True,
                validators=[
                    # Logging validators
                    Validator('logging.level', default=DEFAULT_LOG_LEVEL, is_in=LOG_LEVELS),
                    Validator('logging.enable_debug', default=False, is_type_of=bool),

                    # Ingest validators
                    Validator('ingest.format', default=DEFAULT_FORMAT, is_type_of=str),

                    # Storage validators
                    Validator('storage.enabled', default=False, is_type_of=bool),
                    Validator('storage.db_path', default=DEFAULT_DB_PATH, is_type_of=str),
                ]
            )
            self.settings.validators.validate()
        except DynaconfValidationError as e:
            raise ConfigError("Configuration validation failed", details={"errors": str(e)})
        except Exception as e:
            raise ConfigError(
                "Failed to initialize configuration",
                details={"error": str(e)}
            )

    def __getattr__(self, name: str) -> Any:
        """Delegate attribute access to dynaconf settings.

        Raises:
            ConfigError: If the setting doesn't exist
        """
        if name == "settings":
            raise AttributeError(name)
        try:
            return getattr(self.settings, name)
        except AttributeError:
            raise ConfigError(
                f"Setting '{name}' not found",
                details={"available_settings": list(self.settings.to_dict().keys())}
            )
