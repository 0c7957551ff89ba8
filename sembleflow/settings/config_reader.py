import json
from pathlib import Path
from typing import Any, Optional

import fsspec
import yaml
from fsspec.implementations.local import LocalFileSystem
from pydantic import ValidationError

from sembleflow.client.config import ClientConfig
from sembleflow.exceptions import ConfigurationError


class ConfigReader:
    """Reads settings from a file (JSON or YAML format) and returns a dict.

    File format is guessed from the extension. Supported extensions are
    (lower or upper case):

    - .json
    - .yaml, .yml

    """

    def __init__(self, fs: Optional[fsspec.AbstractFileSystem] = None) -> None:
        """Initializes a config reader."""
        self.fs = fs or LocalFileSystem()

    def read_json(self, file_path: str) -> Any:
        with self.fs.open(file_path, "r") as f:
            return json.load(f)

    def read_yaml(self, file_path: str) -> Any:
        with self.fs.open(file_path, "r") as f:
            return yaml.safe_load(f)

    def read(self, file_path: str) -> dict[str, Any]:
        extension = Path(file_path).suffix.lower()
        if extension == ".json":
            data = self.read_json(file_path)
        elif extension in (".yaml", ".yml"):
            data = self.read_yaml(file_path)
        else:
            raise ConfigurationError(f"Unsupported extension: {extension}")

        # An empty YAML file loads as None
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {file_path}")
        return data


def load_client_config(
    file_path: str, reader: ConfigReader | None = None
) -> ClientConfig:
    """
    Loads the ``client`` section of a settings file.

    Example (YAML)::

        client:
          max_retries: 5
          base_delay: 0.5
          timeout: 60

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values.
    """
    reader = reader or ConfigReader()
    section = reader.read(file_path).get("client") or {}
    try:
        return ClientConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid client settings in {file_path}: {e}") from e
