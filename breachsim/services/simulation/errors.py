"""Exceptions raised by the simulation core."""


class SimulationError(Exception):
    """Base class for simulation core errors."""

    pass


class InvalidInputError(SimulationError):
    """Raised when a request references missing or unusable inputs.

    Covers an unresolvable adversary or asset, an empty asset inventory and
    physically meaningless exfiltration parameters. Raised before any
    computation begins.
    """

    pass
