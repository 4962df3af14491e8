# step.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

from .context import StepContext
from .links import StepLink

# Parameter name -> resolver. Resolvers are only called when a consumer
# asks for the value; they return it or raise.
ParameterMap = Dict[str, Callable[[], str]]


class Step(ABC):
    """
    A unit of idempotent, converging work.

    A step holds no state of its own: everything it produces lives in the
    remote catalog. The scheduler orders steps by matching requires()
    against the creates() of other steps and calls run() once all of a
    step's requirements are met.
    """

    @abstractmethod
    def inputs(self, ctx: StepContext, dry: bool) -> Optional[List[str]]:
        """Values that identify the step's inputs (for caching); None if none."""

    @abstractmethod
    def run(self, ctx: StepContext, dry: bool) -> None:
        """Converge remote state. Raises on any fatal failure."""

    @abstractmethod
    def done(self, ctx: Optional[StepContext] = None) -> bool:
        """True if the step's result already exists."""

    @abstractmethod
    def requires(self) -> List[StepLink]:
        ...

    @abstractmethod
    def creates(self) -> List[StepLink]:
        ...

    @abstractmethod
    def provides(self) -> Tuple[Optional[ParameterMap], Optional[StepLink]]:
        """Lazily resolved parameters, and the link they become valid after."""

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def description(self) -> str:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()}>"
