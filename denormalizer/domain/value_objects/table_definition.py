"""Target schema description handed to the schema state collaborator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

EVENT_TIME_OPTION = 'eventDateProviderColumn'


@dataclass(frozen=True)
class ColumnDefinition:
  name: str
  type: str
  options: Mapping[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class TableDefinition:
  """A single table to be created or altered to match."""

  name: str
  columns: Tuple[ColumnDefinition, ...]
  primary_key: Tuple[str, ...] = ()
  event_time_column: Optional[str] = None

  def column_names(self) -> Tuple[str, ...]:
    return tuple(column.name for column in self.columns)

  def options(self) -> Dict[str, Any]:
    """Informational table attributes."""
    if self.event_time_column is None:
      return {}
    return {EVENT_TIME_OPTION: self.event_time_column}
