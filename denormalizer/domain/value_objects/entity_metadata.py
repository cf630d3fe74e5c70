"""Value objects describing the mapped entities a denormalized table is built from."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

DATETIME_TYPES = frozenset({
  'datetime',
  'datetimetz',
  'datetime_immutable',
  'datetimetz_immutable',
})


@dataclass(frozen=True)
class FieldMapping:
  """A scalar field of an entity."""

  type: str
  id: bool = False
  length: Optional[int] = None
  precision: Optional[int] = None
  scale: Optional[int] = None
  nullable: bool = True

  @property
  def is_datetime(self) -> bool:
    return self.type in DATETIME_TYPES

  def options(self) -> Dict[str, Any]:
    """Per-type options carried over to the physical column."""
    options: Dict[str, Any] = {'nullable': self.nullable}
    if self.length is not None:
      options['length'] = self.length
    if self.precision is not None:
      options['precision'] = self.precision
    if self.scale is not None:
      options['scale'] = self.scale
    return options

  @staticmethod
  def from_dict(raw: Mapping[str, Any]) -> 'FieldMapping':
    return FieldMapping(
      type=raw['type'],
      id=bool(raw.get('id', False)),
      length=raw.get('length'),
      precision=raw.get('precision'),
      scale=raw.get('scale'),
      nullable=raw.get('nullable', True),
    )


@dataclass(frozen=True)
class EntityMetadata:
  """Everything the table builder needs to know about one entity type."""

  name: str
  short_name: str
  fields: Mapping[str, FieldMapping] = field(default_factory=dict)
  associations: Mapping[str, str] = field(default_factory=dict)
  table_name: Optional[str] = None
  exclude_fields: Tuple[str, ...] = ()

  @property
  def segment(self) -> str:
    """Name fragment this entity contributes to table and column names."""
    return self.table_name or self.short_name

  def included_fields(self) -> Dict[str, FieldMapping]:
    return {name: mapping for name, mapping in self.fields.items() if name not in self.exclude_fields}

  def self_association(self) -> Optional[str]:
    """First association that points back at this entity type."""
    return next((name for name, target in self.associations.items() if target == self.name), None)
