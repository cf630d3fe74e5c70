"""Metadata provider reading SQLAlchemy declarative mappings."""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import inspect, types
from sqlalchemy.orm import Mapper, RelationshipDirection

from denormalizer.domain.value_objects.entity_metadata import FieldMapping

TABLE_NAME_ATTRIBUTE = '__dn_table__'
EXCLUDE_FIELDS_ATTRIBUTE = '__dn_exclude__'


def entity_type_of(mapped_class: type) -> str:
  return f'{mapped_class.__module__}.{mapped_class.__qualname__}'


def _type_name(column_type: types.TypeEngine) -> str:
  # subclasses first: BigInteger/SmallInteger < Integer, Text < String, Float < Numeric
  if isinstance(column_type, types.DateTime):
    return 'datetimetz' if column_type.timezone else 'datetime'
  if isinstance(column_type, types.Date):
    return 'date'
  if isinstance(column_type, types.Time):
    return 'time'
  if isinstance(column_type, types.Boolean):
    return 'boolean'
  if isinstance(column_type, types.BigInteger):
    return 'bigint'
  if isinstance(column_type, types.SmallInteger):
    return 'smallint'
  if isinstance(column_type, types.Integer):
    return 'integer'
  if isinstance(column_type, types.Float):
    return 'float'
  if isinstance(column_type, types.Numeric):
    return 'decimal'
  if isinstance(column_type, types.Text):
    return 'text'
  if isinstance(column_type, types.String):
    return 'string'
  if isinstance(column_type, types.JSON):
    return 'json'
  if isinstance(column_type, types.Uuid):
    return 'guid'
  if isinstance(column_type, types.LargeBinary):
    return 'blob'
  return 'string'


class SqlAlchemyMetadataProvider:
  """Exposes mapped classes as entity types named ``module.QualifiedName``.

  A class may carry ``__dn_table__`` to override its name segment and
  ``__dn_exclude__`` to leave fields out of the denormalized table.
  """

  def __init__(self, mapped_classes: Iterable[type]):
    self._classes: Dict[str, type] = {entity_type_of(cls): cls for cls in mapped_classes}

  @property
  def entity_types(self) -> List[str]:
    return list(self._classes)

  def get_scalar_fields(self, entity_type: str) -> Dict[str, FieldMapping]:
    mapper = self._mapper(entity_type)
    if mapper is None:
      return {}
    fields: Dict[str, FieldMapping] = {}
    for attribute in mapper.column_attrs:
      column = attribute.columns[0]
      column_type = column.type
      fields[attribute.key] = FieldMapping(
        type=_type_name(column_type),
        id=bool(column.primary_key),
        length=getattr(column_type, 'length', None),
        precision=getattr(column_type, 'precision', None) if isinstance(column_type, types.Numeric) else None,
        scale=getattr(column_type, 'scale', None) if isinstance(column_type, types.Numeric) else None,
        nullable=bool(column.nullable),
      )
    return fields

  def get_associations(self, entity_type: str) -> Dict[str, str]:
    mapper = self._mapper(entity_type)
    if mapper is None:
      return {}
    return {relationship.key: entity_type_of(relationship.mapper.class_) for relationship in mapper.relationships}

  def get_table_name_override(self, entity_type: str) -> Optional[str]:
    return getattr(self._classes.get(entity_type), TABLE_NAME_ATTRIBUTE, None)

  def get_excluded_fields(self, entity_type: str) -> Set[str]:
    return set(getattr(self._classes.get(entity_type), EXCLUDE_FIELDS_ATTRIBUTE, ()))

  def get_short_type_name(self, entity_type: str) -> str:
    mapped_class = self._classes.get(entity_type)
    return mapped_class.__name__ if mapped_class is not None else entity_type.rsplit('.', 1)[-1]

  def structure_schema(self, root: type) -> Dict[str, Dict[str, str]]:
    """Spanning tree of the relationships reachable from ``root``.

    Each class is expanded once; relationships back to an already discovered
    class are left out, except direct self references.
    """
    root_type = entity_type_of(root)
    schema: Dict[str, Dict[str, str]] = {}
    discovered = {root_type}
    queue = deque([root_type])
    while queue:
      entity_type = queue.popleft()
      targets: Dict[str, str] = {}
      for key, target in self.get_associations(entity_type).items():
        if target == entity_type:
          targets[key] = target
        elif target not in discovered and target in self._classes:
          discovered.add(target)
          targets[key] = target
          queue.append(target)
      schema[entity_type] = targets
    return schema

  def one_to_many_relations(self) -> Dict[str, List[str]]:
    """Raw to-many targets of every known class."""
    relations: Dict[str, List[str]] = {}
    for entity_type in self._classes:
      mapper = self._mapper(entity_type)
      targets = [
        entity_type_of(relationship.mapper.class_)
        for relationship in mapper.relationships
        if relationship.direction is RelationshipDirection.ONETOMANY
      ]
      if targets:
        relations[entity_type] = targets
    return relations

  def _mapper(self, entity_type: str) -> Optional[Mapper]:
    mapped_class = self._classes.get(entity_type)
    return inspect(mapped_class) if mapped_class is not None else None
