"""
Path — Направленное ребро графа котировок

Immutable Pydantic модель ребра между двумя вершинами.

Ребро ссылается на вершины по integer index (arena + index), а не по общему
handle. weight — количество единиц валюты назначения за единицу исходной валюты.

Типы рёбер (Factor):
- FORWARD / BACKWARD: пара рёбер из одной котировки (source→destination и обратно)
- FILLED_UP_FORWARD / FILLED_UP_BACKWARD: синтетические рёбра weight=1.0 между
  одной и той же валютой на разных биржах
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Factor(str, Enum):
    """Тип ребра"""

    FORWARD = "Forward"
    BACKWARD = "Backward"
    FILLED_UP_FORWARD = "FilledUpForward"
    FILLED_UP_BACKWARD = "FilledUpBackward"

    @property
    def is_filled_up(self) -> bool:
        """True для синтетических bridge-рёбер"""
        return self in (Factor.FILLED_UP_FORWARD, Factor.FILLED_UP_BACKWARD)


# =============================================================================
# PATH MODEL
# =============================================================================


class Path(BaseModel):
    """
    Направленное ребро start → end.

    Immutable модель (frozen=True): обновление котировки создаёт новый экземпляр
    через with_quote(), который граф кладёт в тот же слот.
    """

    start: int = Field(..., ge=0, description="Index начальной вершины")
    end: int = Field(..., ge=0, description="Index конечной вершины")
    weight: float = Field(..., gt=0, description="Курс: единиц end-валюты за единицу start-валюты")
    timestamp: datetime = Field(..., description="Время котировки (UTC)")
    factor_type: Factor = Field(..., description="Тип ребра")

    model_config = {"frozen": True}

    @field_validator("end")
    @classmethod
    def validate_not_self_loop(cls, v: int, info) -> int:
        """Петли start == end не допускаются"""
        if "start" in info.data and info.data["start"] == v:
            raise ValueError(f"path must connect two distinct nodes, got start == end == {v}")
        return v

    def with_quote(self, weight: float, timestamp: datetime) -> "Path":
        """
        Новый экземпляр с обновлённым weight/timestamp.

        Args:
            weight: Новый курс
            timestamp: Время новой котировки

        Returns:
            Path с теми же вершинами и factor_type
        """
        return self.model_copy(update={"weight": weight, "timestamp": timestamp})
