"""YAML loader for TTP library definitions with validation."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from breachsim.data.ttp_library.models import TTPDefinition, TTPLibraryFile

logger = logging.getLogger(__name__)

# Base path for TTP definitions
DEFINITIONS_PATH = Path(__file__).parent / "definitions"
DEFAULT_LIBRARY_FILE = DEFINITIONS_PATH / "enterprise.yaml"


class TTPLibraryLoadError(Exception):
    """Raised when the TTP library fails to load or is inconsistent."""

    pass


def _load_yaml_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML content as dict

    Raises:
        TTPLibraryLoadError: If file cannot be read or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise TTPLibraryLoadError(f"TTP library file not found: {file_path}")
    except yaml.YAMLError as e:
        raise TTPLibraryLoadError(f"Invalid YAML in {file_path}: {e}")


def _validate_definitions(data: dict[str, Any], file_path: Path) -> list[TTPDefinition]:
    """Validate TTP definitions from parsed YAML.

    Raises:
        TTPLibraryLoadError: If validation fails
    """
    try:
        return TTPLibraryFile(**data).techniques
    except ValidationError as e:
        error_details = []
        for error in e.errors():
            loc = " -> ".join(str(l) for l in error["loc"])
            error_details.append(f"  {loc}: {error['msg']}")
        raise TTPLibraryLoadError(
            f"Validation error in {file_path}:\n" + "\n".join(error_details)
        )


def load_definitions(file_path: Path | None = None) -> tuple[TTPDefinition, ...]:
    """Load TTP definitions from a YAML file.

    Args:
        file_path: Path to the YAML file (defaults to the packaged catalogue)

    Returns:
        Tuple of TTPDefinition objects in file order
    """
    path = Path(file_path) if file_path else DEFAULT_LIBRARY_FILE
    logger.debug(f"Loading TTP definitions from {path}")
    data = _load_yaml_file(path)
    definitions = _validate_definitions(data, path)
    logger.info(f"Loaded {len(definitions)} TTP definitions from {path.name}")
    return tuple(definitions)
