"""Flattened column of a denormalized table."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Column:
  """One scalar field of a reachable entity, named by its traversal path."""

  name: str
  type: str
  target_entity_class: str
  target_property_name: str
  inverse_property_name: Optional[str] = None
  options: Mapping[str, Any] = field(default_factory=dict, hash=False)

  def as_dict(self) -> Dict[str, Any]:
    """Serialize the column to a dictionary for downstream use."""
    return {
      'name': self.name,
      'type': self.type,
      'target_entity_class': self.target_entity_class,
      'target_property_name': self.target_property_name,
      'inverse_property_name': self.inverse_property_name,
      'options': dict(self.options),
    }
