"""Depth-first walk over a (possibly cyclic) structure schema."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Mapping, Optional, Tuple

from denormalizer.domain.value_objects.entity_metadata import EntityMetadata

log = logging.getLogger(__name__)

StructureSchema = Mapping[str, Mapping[str, str]]
RecurrenceGuard = FrozenSet[Tuple[str, str]]


@dataclass(frozen=True)
class Visit:
  """One entity reached by the walk.

  ``path`` holds the column prefix of the parent (its segments and the
  properties they were reached through), ``property_name`` the property the
  entity was reached through (``None`` for the root).
  """

  metadata: EntityMetadata
  path: Tuple[str, ...]
  property_name: Optional[str]

  @property
  def is_root(self) -> bool:
    return self.property_name is None

  def table_segment(self, delimiter: str) -> str:
    parts = [self.metadata.segment] if self.is_root else [self.property_name, self.metadata.segment]
    return delimiter.join(parts)

  def column_prefix(self) -> List[str]:
    if self.is_root:
      return [*self.path, self.metadata.segment]
    return [*self.path, self.property_name, self.metadata.segment]


def root_class(structure_schema: StructureSchema) -> Optional[str]:
  return next(iter(structure_schema), None)


def walk(structure_schema: StructureSchema, entity_metadata: Mapping[str, EntityMetadata]) -> Iterator[Visit]:
  """Yield every reachable entity in traversal order, starting at the root.

  A fresh recurrence guard is built for each call. The guard holds the
  ``(target, property)`` edges entered on the current path; an edge already on
  the path, or one pointing back at its own source entity, is not followed.
  """
  root = root_class(structure_schema)
  if root is None:
    return
  yield from _walk(structure_schema, entity_metadata, root, (), None, frozenset())


def _walk(
  structure_schema: StructureSchema,
  entity_metadata: Mapping[str, EntityMetadata],
  class_name: str,
  path: Tuple[str, ...],
  property_name: Optional[str],
  guard: RecurrenceGuard,
) -> Iterator[Visit]:
  metadata = entity_metadata.get(class_name)
  if metadata is None:
    log.debug('No metadata for %s; branch skipped', class_name)
    return

  visit = Visit(metadata=metadata, path=path, property_name=property_name)
  yield visit

  child_path = tuple(visit.column_prefix())
  for child_property, target_class in structure_schema.get(class_name, {}).items():
    edge = (target_class, child_property)
    if edge in guard or target_class == class_name:
      log.debug('Recurrent relation %s.%s -> %s not followed', class_name, child_property, target_class)
      continue
    yield from _walk(structure_schema, entity_metadata, target_class, child_path, child_property, guard | {edge})


def entity_types(structure_schema: StructureSchema) -> List[str]:
  """All entity types named by the schema, in order of first mention."""
  seen: List[str] = []
  for class_name, targets in structure_schema.items():
    for candidate in (class_name, *targets.values()):
      if candidate not in seen:
        seen.append(candidate)
  return seen
