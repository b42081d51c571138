"""
Cálculo de horas trabajadas a partir de hora de entrada y salida.

Reglas:
  - Solo cuentan hora y minuto (los segundos se ignoran).
  - No hay manejo de medianoche: salida antes de entrada da una diferencia
    negativa y NO se rechaza acá (el caller decide).
  - hours = diff // 60 y minutes = diff % 60 (división entera con piso), así
    que siempre vale hours * 60 + minutes == total_minutes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class WorkedHours:
    hours: int
    minutes: int
    total_minutes: int
    total_hours: str  # R: string con 2 decimales, ej. "8.50"


def _minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def calculate_worked_hours(entry: time, exit: time) -> WorkedHours:
    diff = _minutes_of_day(exit) - _minutes_of_day(entry)
    hours, minutes = divmod(diff, 60)
    return WorkedHours(
        hours=hours,
        minutes=minutes,
        total_minutes=diff,
        total_hours=f"{diff / 60:.2f}",
    )


def worked_hours_for(entry: time | None, exit: time | None) -> WorkedHours | None:
    """Solo hay horas trabajadas cuando entrada y salida están registradas."""
    if entry is None or exit is None:
        return None
    return calculate_worked_hours(entry, exit)
