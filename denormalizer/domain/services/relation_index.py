"""Index of one-to-many relations that take part in a structure schema."""
from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Mapping, Sequence, Tuple, Union

RawRelations = Union[Sequence[str], Mapping[Hashable, str]]


def _items(relations: RawRelations) -> Iterable[Tuple[Hashable, str]]:
  if isinstance(relations, Mapping):
    return relations.items()
  return enumerate(relations)


def build_one_to_many_index(
  structure_schema: Mapping[str, Mapping[str, str]],
  one_to_many_relation: Mapping[str, RawRelations],
) -> Dict[str, Dict[Hashable, Any]]:
  """Keep only the to-many relations whose target is an entity of the schema.

  Schema keys are walked in reverse declaration order so that child types are
  grouped under their sources before the parents are. Each kept relation stays
  under its original source and keeps its original key (or list position).
  """
  index: Dict[str, Dict[Hashable, Any]] = {}
  for schema_key in reversed(list(structure_schema)):
    for source, relations in one_to_many_relation.items():
      matching = [(key, target) for key, target in _items(relations) if target == schema_key]
      for key, target in matching:
        index.setdefault(source, {})[key] = target
  return index


def has_relation(index: Mapping[str, Mapping[Hashable, Any]], source: str, target: str) -> bool:
  return target in index.get(source, {}).values()
