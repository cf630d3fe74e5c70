"""Output port for diffing a target table against a live database schema."""
from __future__ import annotations

from typing import List, Protocol

from denormalizer.domain.value_objects.table_definition import TableDefinition


class SchemaStateRepository(Protocol):
  """Turns a target table description into migration statements."""

  def migration_sql(self, definition: TableDefinition, database_url: str) -> List[str]:
    """Return the DDL statements that bring the live schema to ``definition``."""
    ...
