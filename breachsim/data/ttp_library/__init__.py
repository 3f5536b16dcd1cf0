"""TTP library module.

This module provides the fixed catalogue of attack techniques used by the
campaign builder, loaded from YAML into an immutable registry.
"""

from breachsim.data.ttp_library.loader import TTPLibraryLoadError, load_definitions
from breachsim.data.ttp_library.models import (
    ENTRY_STAGES,
    KillChainStage,
    TTPDefinition,
)
from breachsim.data.ttp_library.registry import (
    TTPRegistry,
    get_ttp_registry,
    load_ttp_library,
)

__all__ = [
    "ENTRY_STAGES",
    "KillChainStage",
    "TTPDefinition",
    "TTPLibraryLoadError",
    "TTPRegistry",
    "get_ttp_registry",
    "load_definitions",
    "load_ttp_library",
]
