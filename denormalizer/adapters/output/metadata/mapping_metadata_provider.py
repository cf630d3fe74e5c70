"""Metadata provider backed by a plain, already-parsed mapping document."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Set

from denormalizer.domain.value_objects.entity_metadata import FieldMapping


class MappingMetadataProvider:
  """Reads entity metadata from a mapping shaped like::

    {
      'app.Order': {
        'short_name': 'Order',
        'table_name': None,
        'exclude_fields': ['secret'],
        'fields': {'id': {'type': 'integer', 'id': True}},
        'associations': {'customer': 'app.Customer'},
      },
    }

  Unknown entity types yield empty metadata.
  """

  def __init__(self, entities: Mapping[str, Mapping[str, Any]]):
    self._entities = entities

  def get_scalar_fields(self, entity_type: str) -> Dict[str, FieldMapping]:
    fields = self._entity(entity_type).get('fields') or {}
    return {name: FieldMapping.from_dict(raw) for name, raw in fields.items()}

  def get_associations(self, entity_type: str) -> Dict[str, str]:
    return dict(self._entity(entity_type).get('associations') or {})

  def get_table_name_override(self, entity_type: str) -> Optional[str]:
    return self._entity(entity_type).get('table_name') or None

  def get_excluded_fields(self, entity_type: str) -> Set[str]:
    return set(self._entity(entity_type).get('exclude_fields') or ())

  def get_short_type_name(self, entity_type: str) -> str:
    return self._entity(entity_type).get('short_name') or entity_type.rsplit('.', 1)[-1]

  def has_entity(self, entity_type: str) -> bool:
    return entity_type in self._entities

  def _entity(self, entity_type: str) -> Mapping[str, Any]:
    return self._entities.get(entity_type) or {}
