"""Simple dependency wiring helpers."""
from __future__ import annotations

from functools import lru_cache

from denormalizer.adapters.output.database.sqlalchemy_schema_repository import SqlAlchemySchemaRepository
from denormalizer.application.handlers.denormalize_handler import DenormalizeHandler
from denormalizer.application.services.denormalizer_service_impl import DenormalizerServiceImpl
from denormalizer.application.services.migration_emitter import MigrationEmitter
from denormalizer.common.config import get_settings


@lru_cache(maxsize=1)
def create_denormalizer_service():
  settings = get_settings()
  emitter = MigrationEmitter(SqlAlchemySchemaRepository())
  handler = DenormalizeHandler(
    emitter,
    field_delimiter=settings.field_delimiter,
    table_delimiter=settings.table_delimiter,
  )
  return DenormalizerServiceImpl(handler)
