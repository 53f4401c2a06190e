"""Shared utilities for Pydantic model persistence.

Stateless helpers for loading Pydantic models from TOML or JSON files and
writing text files safely.

Error Handling:
    Low-level parse and validation errors are converted into
    ConfigurationError subclasses with recovery hints.

Safety Features:
    - Automatic .bak backups before overwriting files
    - Atomic writes using temp file + rename
"""

import json
import logging
import shutil
import tomllib
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ambiway.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

# Type variable bound to Pydantic BaseModel
T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Utility class providing shared Pydantic persistence operations.

    All methods are static and thread-safe; they operate only on their
    parameters.

    Example Usage:
        ```python
        config = PydanticPersistence.load(Path("config.toml"), AppConfig)
        ```
    """

    @staticmethod
    def read_document(path: Path) -> dict[str, Any]:
        """
        Read a TOML or JSON file into a plain dict.

        The format is chosen by file suffix; anything other than `.json`
        is parsed as TOML.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty or has invalid syntax
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        content = path.read_text(encoding="utf-8")
        if not content.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            if path.suffix.lower() == ".json":
                data = json.loads(content)
            else:
                data = tomllib.loads(content)
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise ConfigFileInvalidError(str(path), str(e)) from e

        if not isinstance(data, dict):
            raise ConfigFileInvalidError(str(path), "Top level must be a table/object")
        return data

    @staticmethod
    def load(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a TOML or JSON file.

        Args:
            path: Path to the file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the syntax is invalid
            ConfigValidationError: If the content fails Pydantic validation
        """
        data = PydanticPersistence.read_document(path)

        try:
            model = model_type.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def validate_file(path: Path, model_type: type[T]) -> tuple[bool, str | None]:
        """
        Validate a file against a Pydantic model.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            PydanticPersistence.load(path, model_type)
            return True, None
        except FileNotFoundError:
            return False, f"File not found: {path}"
        except ConfigurationError as e:
            return False, e.get_full_message()

    @staticmethod
    def write_text(path: Path, content: str, backup: bool = True) -> None:
        """
        Write a text file with automatic backup and atomic replace.

        Args:
            path: Destination path (parent directories are created)
            content: File content
            backup: Create .bak backup before overwriting an existing file

        Raises:
            OSError: If the file cannot be written
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            backup_path = path.with_suffix(path.suffix + ".bak")
            shutil.copy2(path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(content, encoding="utf-8")
            temp_path.replace(path)
            logger.debug(f"Wrote {path}")
        finally:
            if temp_path.exists():
                temp_path.unlink()
