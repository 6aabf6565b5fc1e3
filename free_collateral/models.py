"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FreeCollateralSnapshot:
    """Free collateral of one account at query time, in USD."""

    debt: float
    collateral: float
    free_collateral: float

    @classmethod
    def from_valuations(cls, collateral: float, debt: float) -> FreeCollateralSnapshot:
        return cls(debt=debt, collateral=collateral, free_collateral=collateral - debt)


@dataclass(frozen=True)
class FormField:
    """Single input of the subscription form rendered by the host."""

    field_type: str
    field_id: str
    label: str
    default: float
    description: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.field_type,
            "id": self.field_id,
            "label": self.label,
            "default": self.default,
            "description": self.description,
        }
