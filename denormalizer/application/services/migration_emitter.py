"""Produces migration statements for a denormalized table."""
from __future__ import annotations

import logging
from typing import List

from denormalizer.domain.entities.table_group import TableGroup
from denormalizer.ports.output.schema_state_repository import SchemaStateRepository

log = logging.getLogger(__name__)


class MigrationEmitter:
  """Hands the target table of a group to the schema state repository."""

  def __init__(self, repository: SchemaStateRepository):
    self._repository = repository

  def emit(self, table_group: TableGroup, database_url: str) -> List[str]:
    definition = table_group.to_table_definition()
    statements = list(self._repository.migration_sql(definition, database_url))
    log.info('%d migration statement(s) for table %s', len(statements), definition.name)
    return statements
