"""
AstroPulse – Domain Value Object: VisibleRange
================================================
Rango temporal visible de una superficie de gráfico, en la unidad
nativa del widget (segundos UNIX).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class VisibleRange:
    """Rango visible {from, to}. `from` es palabra reservada → from_."""

    from_: float
    to: float

    @property
    def span(self) -> float:
        return self.to - self.from_

    @property
    def is_degenerate(self) -> bool:
        """Rango vacío o invertido: no se puede dividir por su duración."""
        return self.span <= 0

    def to_millis(self) -> tuple[int, int]:
        return int(self.from_ * 1000), int(self.to * 1000)

    def to_dict(self) -> dict:
        return {"from": self.from_, "to": self.to}

    @classmethod
    def from_dict(cls, data: dict) -> "VisibleRange":
        return cls(from_=float(data["from"]), to=float(data["to"]))
