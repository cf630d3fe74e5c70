"""Command object representing a denormalization request."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from denormalizer.domain.value_objects.entity_metadata import EntityMetadata


@dataclass(frozen=True)
class DenormalizeCommand:
  structure_schema: Mapping[str, Mapping[str, str]]
  entities: Mapping[str, EntityMetadata]
  one_to_many: Mapping[str, Any] = field(default_factory=dict)
  database_url: Optional[str] = None

  def __post_init__(self) -> None:
    if not self.structure_schema:
      raise ValueError('structure_schema is required')
