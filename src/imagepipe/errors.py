# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


# ----------------------------------------------------------------------
# Catalog errors
# ----------------------------------------------------------------------

@dataclass
class CatalogError(Exception):
    """
    A catalog call failed.

    Carries the operation ("create imagestream", "get imagestreamtag", ...)
    and the target identity ("ns/name:tag") so the failure can be diagnosed
    from a single line of output.
    """
    operation: str
    target: str
    message: str
    status: int | None = None

    def __str__(self) -> str:
        return f"could not {self.operation} {self.target}: {self.message}"


@dataclass
class AlreadyExistsError(CatalogError):
    """The object being created is already present."""


@dataclass
class NotFoundError(CatalogError):
    """The object being read or deleted is absent."""


# ----------------------------------------------------------------------
# Step errors
# ----------------------------------------------------------------------

@dataclass
class ResolutionError(Exception):
    """The source image identity could not be determined."""
    source: str
    cause: Exception | None = None

    def __str__(self) -> str:
        if self.cause is not None:
            return f"could not resolve base image {self.source}: {self.cause}"
        return f"could not resolve base image {self.source}"


@dataclass
class RegistryUnavailableError(Exception):
    """An image stream exposes no registry hostname to build a pull spec from."""
    stream: str

    def __str__(self) -> str:
        return f"image stream {self.stream} has no accessible image registry value"


@dataclass
class StepCancelledError(Exception):
    reason: str = "cancelled"

    def __str__(self) -> str:
        return f"step {self.reason}"


# ----------------------------------------------------------------------
# Scheduler errors
# ----------------------------------------------------------------------

@dataclass
class StepFailure(Exception):
    step: str
    description: str
    error: Exception
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"step {self.step} failed ({self.description}): {self.error}"


class GraphError(ValueError):
    """The step graph cannot be scheduled."""
