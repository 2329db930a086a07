"""Exception taxonomy for an allocation run."""

from typing import List


class LotteryError(Exception):
    """Base class for errors raised by the allocation engine."""


class SupplyValidationError(LotteryError):
    """Raised when demand for one or more housing types exceeds supply.

    ``shortages`` lists every violating type (``TypeBalance`` rows) in demand
    order. ``housing_type``, ``demand`` and ``supply`` describe the first one.
    """

    def __init__(self, shortages: List):
        if not shortages:
            raise ValueError("SupplyValidationError needs at least one shortage")
        self.shortages = list(shortages)
        first = self.shortages[0]
        self.housing_type = first.housing_type
        self.demand = first.demand
        self.supply = first.supply
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = (
            f"Validation failed: demand for housing type '{self.housing_type}' "
            f"({self.demand}) exceeds available units ({self.supply})."
        )
        others = self.shortages[1:]
        if others:
            extra = "; ".join(
                f"'{s.housing_type}' needs {s.demand}, has {s.supply}" for s in others
            )
            message += f" Also short: {extra}."
        return message


class SequenceNotDrawnError(LotteryError):
    """Raised when allocation is attempted without a valid priority sequence."""


class InvalidTransitionError(LotteryError):
    """Raised when a stage event arrives out of order."""

    def __init__(self, stage, event):
        self.stage = stage
        self.event = event
        super().__init__(
            f"Event {type(event).__name__} is not allowed in stage '{stage.value}'."
        )
