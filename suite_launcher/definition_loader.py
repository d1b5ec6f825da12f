"""Load YAML definition files into validated models."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from suite_launcher.errors import InvalidDefinitionError
from suite_launcher.models.base import Model


def load_definition[M: Model](
    path: Path, model_cls: type[M], **overrides: Any
) -> M:
    """Parse a YAML file and validate it against a model.

    Args:
        path: YAML file to read
        model_cls: Model class to validate the document against
        **overrides: Fields set on the model regardless of the file content

    Returns:
        The validated model instance

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidDefinitionError: If the file cannot be read as UTF-8 text, is
            not valid YAML or does not match the model

    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDefinitionError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidDefinitionError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidDefinitionError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}"
        )

    try:
        return model_cls.model_validate({**data, **overrides})
    except ValidationError as e:
        raise InvalidDefinitionError(f"Invalid definition in {path}: {e}") from e


def list_definitions(directory: Path) -> list[str]:
    """List definition names (file stems) available in a directory."""
    if not directory.is_dir():
        return []
    return sorted(path.stem for path in directory.glob("*.yaml"))
