"""Output port for reading entity mapping metadata."""
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Set

from denormalizer.domain.value_objects.entity_metadata import EntityMetadata, FieldMapping


class MetadataProvider(Protocol):
  """Defines how mapping metadata of an entity type is obtained."""

  def get_scalar_fields(self, entity_type: str) -> Mapping[str, FieldMapping]:
    """Return the ordered scalar fields of the entity."""
    ...

  def get_associations(self, entity_type: str) -> Mapping[str, str]:
    """Return association field name -> target entity type."""
    ...

  def get_table_name_override(self, entity_type: str) -> Optional[str]:
    ...

  def get_excluded_fields(self, entity_type: str) -> Set[str]:
    ...

  def get_short_type_name(self, entity_type: str) -> str:
    ...


def build_entity_metadata(provider: MetadataProvider, entity_types: Iterable[str]) -> dict[str, EntityMetadata]:
  """Collect one descriptor per entity type from a provider."""
  descriptors: dict[str, EntityMetadata] = {}
  for entity_type in entity_types:
    if entity_type in descriptors:
      continue
    descriptors[entity_type] = EntityMetadata(
      name=entity_type,
      short_name=provider.get_short_type_name(entity_type),
      fields=dict(provider.get_scalar_fields(entity_type)),
      associations=dict(provider.get_associations(entity_type)),
      table_name=provider.get_table_name_override(entity_type),
      exclude_fields=tuple(sorted(provider.get_excluded_fields(entity_type))),
    )
  return descriptors
