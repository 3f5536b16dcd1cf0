"""Immutable registry of TTP definitions."""

import logging
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from breachsim.config import get_settings
from breachsim.data.ttp_library.loader import TTPLibraryLoadError, load_definitions
from breachsim.data.ttp_library.models import KillChainStage, TTPDefinition

logger = logging.getLogger(__name__)


class TTPRegistry:
    """Read-only catalogue of TTP definitions.

    Built once from a sequence of definitions and never mutated afterwards,
    so a single instance can be shared across concurrent requests. Tests
    construct their own registries instead of patching the default one.
    """

    def __init__(self, definitions: Iterable[TTPDefinition]):
        """Index and cross-check the definitions.

        Args:
            definitions: TTP definitions in catalogue order

        Raises:
            TTPLibraryLoadError: On duplicate ids/names or dangling
                requires/synergy references
        """
        ordered = tuple(definitions)
        by_id: dict[str, TTPDefinition] = {}
        by_name: dict[str, TTPDefinition] = {}

        for ttp in ordered:
            if ttp.id in by_id:
                raise TTPLibraryLoadError(f"Duplicate TTP id: {ttp.id}")
            if ttp.name in by_name:
                raise TTPLibraryLoadError(f"Duplicate TTP name: {ttp.name}")
            by_id[ttp.id] = ttp
            by_name[ttp.name] = ttp

        for ttp in ordered:
            for ref in (*ttp.requires, *ttp.synergy):
                if ref not in by_id:
                    raise TTPLibraryLoadError(
                        f"TTP {ttp.id} references unknown TTP {ref!r}"
                    )

        self._definitions = ordered
        self._by_id = MappingProxyType(by_id)
        self._by_name = MappingProxyType(by_name)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, ref: str) -> bool:
        return self.get(ref) is not None

    def get(self, ref: str) -> TTPDefinition | None:
        """Resolve a TTP by id or display name.

        Args:
            ref: TTP id (e.g. ``t5``) or name (e.g. ``Execution: PowerShell``)

        Returns:
            TTPDefinition if found, None otherwise
        """
        return self._by_id.get(ref) or self._by_name.get(ref)

    def list_all(self) -> tuple[TTPDefinition, ...]:
        """Get every definition in catalogue order."""
        return self._definitions

    def by_stage(self, stage: KillChainStage) -> list[TTPDefinition]:
        """Get all definitions belonging to a kill chain stage."""
        return [t for t in self._definitions if t.stage == stage]


def load_ttp_library(file_path: Path | None = None) -> TTPRegistry:
    """Load a YAML catalogue into a registry.

    Args:
        file_path: Catalogue path (defaults to the packaged catalogue)

    Returns:
        TTPRegistry
    """
    registry = TTPRegistry(load_definitions(file_path))
    logger.info(f"TTP registry initialized with {len(registry)} definitions")
    return registry


@lru_cache
def get_ttp_registry() -> TTPRegistry:
    """Get the process-wide default registry.

    Reads ``Settings.ttp_library_path`` on first call, falling back to the
    packaged catalogue.
    """
    return load_ttp_library(get_settings().ttp_library_path)
