"""Grouping of column values into one set per repeated occurrence."""
from __future__ import annotations

from typing import Any, Dict, List


class ValueSetAccumulator:
  """Collects values for a table; a repeated column name opens the next set."""

  def __init__(self) -> None:
    self._set_numbers: Dict[str, int] = {}
    self._value_sets: Dict[int, Dict[str, Any]] = {}

  def add_value(self, name: str, value: Any) -> int:
    """Store ``value`` and return the occurrence index it landed in."""
    occurrence = self._set_numbers[name] + 1 if name in self._set_numbers else 0
    self._set_numbers[name] = occurrence
    self._value_sets.setdefault(occurrence, {})[name] = value
    return occurrence

  def get_values_array(self) -> List[Dict[str, Any]]:
    return [dict(self._value_sets[occurrence]) for occurrence in sorted(self._value_sets)]
