"""SQLAlchemy-powered schema state repository implementation."""
from __future__ import annotations

from typing import Dict, List

from sqlalchemy import Column, MetaData, Table, create_engine, inspect, types
from sqlalchemy.engine import Dialect, Engine
from sqlalchemy.schema import CreateColumn, CreateTable

from denormalizer.domain.value_objects.table_definition import ColumnDefinition, TableDefinition
from denormalizer.ports.output.schema_state_repository import SchemaStateRepository


class UnsupportedColumnTypeError(ValueError):
  """Raised when a column type has no SQLAlchemy counterpart."""


_TYPE_MAP = {
  'smallint': types.SmallInteger,
  'integer': types.Integer,
  'bigint': types.BigInteger,
  'boolean': types.Boolean,
  'decimal': types.Numeric,
  'float': types.Float,
  'string': types.String,
  'text': types.Text,
  'guid': types.Uuid,
  'json': types.JSON,
  'blob': types.LargeBinary,
  'binary': types.LargeBinary,
  'date': types.Date,
  'date_immutable': types.Date,
  'time': types.Time,
  'time_immutable': types.Time,
  'datetime': types.DateTime,
  'datetime_immutable': types.DateTime,
  'datetimetz': types.DateTime,
  'datetimetz_immutable': types.DateTime,
}


def sqlalchemy_type(column: ColumnDefinition) -> types.TypeEngine:
  type_class = _TYPE_MAP.get(column.type)
  if type_class is None:
    raise UnsupportedColumnTypeError(f'Unsupported column type {column.type!r} for column {column.name!r}')

  options = column.options
  if type_class is types.String:
    return types.String(length=options.get('length', 255))
  if type_class is types.Numeric:
    return types.Numeric(precision=options.get('precision'), scale=options.get('scale'))
  if type_class is types.DateTime:
    return types.DateTime(timezone=column.type.startswith('datetimetz'))
  return type_class()


def build_table(definition: TableDefinition, metadata: MetaData) -> Table:
  """Materialize a table definition as a SQLAlchemy ``Table``."""
  primary_key = set(definition.primary_key)
  columns = [
    Column(
      column.name,
      sqlalchemy_type(column),
      primary_key=column.name in primary_key,
      nullable=column.name not in primary_key and column.options.get('nullable', True),
      autoincrement=False,
    )
    for column in definition.columns
  ]
  return Table(definition.name, metadata, *columns, info=definition.options())


class SqlAlchemySchemaRepository(SchemaStateRepository):
  """Compares the target table against the live database and emits DDL.

  A missing table yields one ``CREATE TABLE``; an existing one yields
  ``ALTER TABLE`` statements adding and dropping columns.
  """

  def __init__(self) -> None:
    self._engines: dict[str, Engine] = {}

  def migration_sql(self, definition: TableDefinition, database_url: str) -> List[str]:
    engine = self._get_engine(database_url)
    inspector = inspect(engine)
    table = build_table(definition, MetaData())
    dialect = engine.dialect

    if not inspector.has_table(definition.name):
      return [self._compile(CreateTable(table), dialect)]

    existing: Dict[str, dict] = {column['name']: column for column in inspector.get_columns(definition.name)}
    table_name = dialect.identifier_preparer.format_table(table)
    statements: List[str] = []
    for column in table.columns:
      if column.name not in existing:
        statements.append(f'ALTER TABLE {table_name} ADD COLUMN {self._compile(CreateColumn(column), dialect)}')
    target_names = set(definition.column_names())
    for name in existing:
      if name not in target_names:
        statements.append(f'ALTER TABLE {table_name} DROP COLUMN {dialect.identifier_preparer.quote(name)}')
    return statements

  def _get_engine(self, database_url: str) -> Engine:
    if database_url not in self._engines:
      self._engines[database_url] = create_engine(database_url)
    return self._engines[database_url]

  @staticmethod
  def _compile(construct, dialect: Dialect) -> str:
    return str(construct.compile(dialect=dialect)).strip()
