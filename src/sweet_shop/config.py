"""Configuration for the sweet shop storage engine and server."""

import json
import os
from pathlib import Path
from typing import (
    Any,
    Dict,
    Literal,
    Optional,
    Union,
)

from pydantic import (
    BaseModel,
    Field,
)

from .backends import (
    JsonFileBackend,
    MemoryBackend,
    StorageBackend,
)
from .exceptions import ConfigurationError


CONFIG_ENV_VAR = "SWEET_SHOP_CONFIG"
DEFAULT_STORAGE_KEY = "sweetshop_inventory"


class SweetShopConfig(BaseModel):
    """Storage and logging settings.

    Examples:
        >>> config = SweetShopConfig.from_dict({"backend": "memory"})
        >>> config = SweetShopConfig.from_file("sweet_shop.json")
    """

    backend: Literal["file", "memory"] = Field(default="file", description="Persistence medium")
    data_dir: Path = Field(default=Path("data"), description="Directory for the file backend")
    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1, description="Name of the collection slot")
    max_bytes: Optional[int] = Field(default=None, gt=0, description="Write quota for the memory backend")
    log_level: str = Field(default="WARNING", description="Level for the sweet_shop logger")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SweetShopConfig":
        """Create a configuration from a dictionary.

        Raises:
            pydantic.ValidationError: If a setting is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "SweetShopConfig":
        """Create a configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If a setting is invalid
        """
        config_data = json.loads(Path(config_path).read_text(encoding="utf-8"))
        return cls.from_dict(config_data)


def load_config() -> SweetShopConfig:
    """Load the configuration named by $SWEET_SHOP_CONFIG, or the defaults.

    Raises:
        ConfigurationError: If the named file is missing, unreadable or invalid
    """
    config_path = os.getenv(CONFIG_ENV_VAR)
    if config_path:
        try:
            return SweetShopConfig.from_file(config_path)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}", path=config_path) from e
    return SweetShopConfig()


def create_backend(config: SweetShopConfig) -> StorageBackend:
    """Build the storage backend a configuration describes."""
    if config.backend == "memory":
        return MemoryBackend(max_bytes=config.max_bytes)
    return JsonFileBackend(config.data_dir)
