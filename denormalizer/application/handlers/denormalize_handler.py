"""Application handler that builds denormalized tables and their migrations."""
from __future__ import annotations

import logging
import time

from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.application.queries.denormalize_result import DenormalizeResult, ResultStatus
from denormalizer.application.services.migration_emitter import MigrationEmitter
from denormalizer.domain.entities.table_group import (
  DENORMALIZE_FIELD_DELIMITER,
  DENORMALIZE_TABLE_DELIMITER,
  TableGroup,
)

log = logging.getLogger(__name__)


class DenormalizeHandler:
  """Coordinates the table builder and the migration emitter."""

  def __init__(
    self,
    emitter: MigrationEmitter,
    field_delimiter: str = DENORMALIZE_FIELD_DELIMITER,
    table_delimiter: str = DENORMALIZE_TABLE_DELIMITER,
  ):
    self._emitter = emitter
    self._field_delimiter = field_delimiter
    self._table_delimiter = table_delimiter

  def build_table_group(self, command: DenormalizeCommand) -> TableGroup:
    return TableGroup(
      command.structure_schema,
      command.entities,
      command.one_to_many,
      field_delimiter=self._field_delimiter,
      table_delimiter=self._table_delimiter,
    )

  def handle(self, command: DenormalizeCommand, with_migration: bool = False) -> DenormalizeResult:
    start = time.perf_counter()
    try:
      if with_migration and not command.database_url:
        raise ValueError('database_url is required to plan a migration')

      table_group = self.build_table_group(command)
      statements = self._emitter.emit(table_group, command.database_url) if with_migration else []

      return DenormalizeResult(
        status=ResultStatus.SUCCESS,
        table_name=table_group.get_table_name(),
        columns=[column.as_dict() for column in table_group.get_columns().values()],
        indexes=table_group.get_indexes(),
        event_time_column=table_group.get_event_time_column(),
        one_to_many=table_group.get_one_to_many_relation_schema(),
        statements=statements,
        execution_time=time.perf_counter() - start,
      )
    except Exception as exc:  # noqa: BLE001
      log.warning('Denormalization failed: %s', exc)
      return DenormalizeResult(
        status=ResultStatus.ERROR,
        execution_time=time.perf_counter() - start,
        error=str(exc),
      )
