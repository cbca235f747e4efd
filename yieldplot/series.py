from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


TextAlign = Literal["left", "center", "right"]


@dataclass(frozen=True)
class YieldPoint:
    term: str
    rate: float


@dataclass(frozen=True)
class AnchorPoint:
    x: float
    y: float
    value: float


@dataclass(frozen=True)
class LabelPlacement:
    x: float
    y: float
    align: TextAlign
