"""Blanket and liner inventory models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_BLANKET_COLOR = "#9CAF88"
DEFAULT_LINER_COLOR = "#E8D4C4"
DEFAULT_LINER_GRAMS = 100


@dataclass(frozen=True)
class Blanket:
    """A turnout blanket or rain sheet owned by a user.

    ``grams`` is the fill weight; 0 means a rain sheet. The lifecycle status is
    derived from whether the blanket is currently assigned to a horse.
    """

    id: str
    name: str
    grams: int
    waterproof: bool = True
    color: str = DEFAULT_BLANKET_COLOR
    currently_on_horse_id: Optional[str] = None

    @property
    def status(self) -> str:
        return "in-use" if self.currently_on_horse_id else "available"


@dataclass(frozen=True)
class Liner:
    """A liner that may be paired with one blanket by id.

    The pairing is a plain reference. When the blanket is deleted the reference
    dangles and the liner simply stops contributing to any blanket.
    """

    id: str
    name: str
    grams: int = DEFAULT_LINER_GRAMS
    color: str = DEFAULT_LINER_COLOR
    paired_with_blanket_id: Optional[str] = None


__all__ = [
    "Blanket",
    "Liner",
    "DEFAULT_BLANKET_COLOR",
    "DEFAULT_LINER_COLOR",
    "DEFAULT_LINER_GRAMS",
]
