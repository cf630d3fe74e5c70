"""Denormalized table built from a tree of related entities."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Hashable, List, Mapping, Optional, Union

from denormalizer.domain.services.relation_index import RawRelations, build_one_to_many_index, has_relation
from denormalizer.domain.services.schema_traversal import StructureSchema, walk
from denormalizer.domain.services.value_sets import ValueSetAccumulator
from denormalizer.domain.value_objects.column import Column
from denormalizer.domain.value_objects.entity_metadata import EntityMetadata
from denormalizer.domain.value_objects.table_definition import ColumnDefinition, TableDefinition

log = logging.getLogger(__name__)

DENORMALIZE_FIELD_DELIMITER = '__'
DENORMALIZE_TABLE_DELIMITER = '_'


class DuplicateColumnError(ValueError):
  """Raised when two fields of the tree flatten to the same column name."""


class TableGroup:
  """Flattened table schema for one structure schema.

  The table name, the columns, the primary key and the event time column are
  computed on first access and kept for the lifetime of the object. First
  computation is serialized with a lock; afterwards reads need no locking.
  Values added through :meth:`add_column_value` are not synchronized.
  """

  def __init__(
    self,
    structure_schema: StructureSchema,
    entity_metadata: Mapping[str, EntityMetadata],
    one_to_many_relation: Mapping[str, RawRelations],
    field_delimiter: str = DENORMALIZE_FIELD_DELIMITER,
    table_delimiter: str = DENORMALIZE_TABLE_DELIMITER,
  ) -> None:
    self._structure_schema = {key: dict(value) for key, value in structure_schema.items()}
    self._entity_metadata = dict(entity_metadata)
    self._one_to_many_relation = build_one_to_many_index(self._structure_schema, one_to_many_relation)
    self._field_delimiter = field_delimiter
    self._table_delimiter = table_delimiter

    self._lock = threading.Lock()
    self._table_name: Optional[str] = None
    self._columns: Optional[Dict[str, Column]] = None
    self._indexes: List[str] = []
    self._event_time_column: Optional[str] = None
    self._values = ValueSetAccumulator()

  def __str__(self) -> str:
    return self.get_table_name()

  def get_structure_schema(self) -> Dict[str, Dict[str, str]]:
    return {key: dict(value) for key, value in self._structure_schema.items()}

  def get_one_to_many_relation_schema(self) -> Dict[str, Dict[Hashable, Any]]:
    return {source: dict(relations) for source, relations in self._one_to_many_relation.items()}

  def has_one_to_many_relation(self, source: str, target: str) -> bool:
    return has_relation(self._one_to_many_relation, source, target)

  def has_class(self, class_name: str) -> bool:
    return any(
      key == class_name or class_name in targets.values()
      for key, targets in self._structure_schema.items()
    )

  def get_table_name(self) -> str:
    if self._table_name is None:
      with self._lock:
        if self._table_name is None:
          self._table_name = self._build_table_name()
    return self._table_name

  def get_columns(self) -> Dict[str, Column]:
    return dict(self._ensure_columns())

  def get_indexes(self) -> List[str]:
    self._ensure_columns()
    return list(self._indexes)

  def get_event_time_column(self) -> Optional[str]:
    self._ensure_columns()
    return self._event_time_column

  def find_column(self, target_entity: str, target_property: str) -> Optional[Column]:
    return next(
      (
        column for column in self._ensure_columns().values()
        if column.target_entity_class == target_entity and column.target_property_name == target_property
      ),
      None,
    )

  def get_column_name_by_target_entity_and_property(self, target_entity: str, target_property: str) -> Optional[str]:
    column = self.find_column(target_entity, target_property)
    return column.name if column else None

  def add_column_value(self, column: Union[Column, str], value: Any) -> 'TableGroup':
    name = column.name if isinstance(column, Column) else column
    self._values.add_value(name, value)
    return self

  def get_values_array(self) -> List[Dict[str, Any]]:
    return self._values.get_values_array()

  def to_table_definition(self) -> TableDefinition:
    """Describe the physical table these columns map to."""
    columns = tuple(
      ColumnDefinition(name=column.name, type=column.type, options=dict(column.options))
      for column in self.get_columns().values()
    )
    return TableDefinition(
      name=self.get_table_name(),
      columns=columns,
      primary_key=tuple(self.get_indexes()),
      event_time_column=self.get_event_time_column(),
    )

  def _ensure_columns(self) -> Dict[str, Column]:
    if self._columns is None:
      with self._lock:
        if self._columns is None:
          self._build_columns()
    return self._columns

  def _build_table_name(self) -> str:
    segments = [
      visit.table_segment(self._field_delimiter)
      for visit in walk(self._structure_schema, self._entity_metadata)
    ]
    return self._table_delimiter.join(segments).lower()

  def _build_columns(self) -> None:
    columns: Dict[str, Column] = {}
    indexes: List[str] = []
    event_time_column: Optional[str] = None
    index_is_set = False

    for visit in walk(self._structure_schema, self._entity_metadata):
      metadata = visit.metadata
      prefix = visit.column_prefix()
      inverse_property = metadata.self_association()

      for field_name, mapping in metadata.included_fields().items():
        column = Column(
          name=self._field_delimiter.join([*prefix, field_name]),
          type=mapping.type,
          target_entity_class=metadata.name,
          target_property_name=field_name,
          inverse_property_name=inverse_property,
          options=mapping.options(),
        )
        clash = columns.get(column.name)
        if clash is not None:
          raise DuplicateColumnError(
            f'{metadata.name}.{field_name} and {clash.target_entity_class}.{clash.target_property_name} '
            f'both map to column {column.name!r}'
          )
        if not index_is_set and mapping.id:
          indexes.append(column.name)
        if event_time_column is None and mapping.is_datetime:
          event_time_column = column.name
        columns[column.name] = column

      # only the first visited entity contributes to the primary key
      index_is_set = True

    log.debug('Built %d columns, primary key %s, event time column %s', len(columns), indexes, event_time_column)
    self._indexes = indexes
    self._event_time_column = event_time_column
    self._columns = columns
