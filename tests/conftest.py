from __future__ import annotations

import copy

import pytest

from denormalizer.adapters.output.database.sqlalchemy_schema_repository import SqlAlchemySchemaRepository
from denormalizer.application.handlers.denormalize_handler import DenormalizeHandler
from denormalizer.application.services.denormalizer_service_impl import DenormalizerServiceImpl
from denormalizer.application.services.migration_emitter import MigrationEmitter
from denormalizer.domain.value_objects.entity_metadata import EntityMetadata, FieldMapping

ORDER_DOCUMENT = {
  'entities': {
    'shop.Order': {
      'fields': {
        'id': {'type': 'integer', 'id': True},
        'created_at': {'type': 'datetime'},
        'total': {'type': 'decimal', 'precision': 10, 'scale': 2},
      },
      'associations': {'customer': 'shop.Customer'},
    },
    'shop.Customer': {
      'fields': {
        'id': {'type': 'integer', 'id': True},
        'name': {'type': 'string', 'length': 80},
        'password': {'type': 'string'},
      },
      'exclude_fields': ['password'],
    },
  },
  'structure': {'shop.Order': {'customer': 'shop.Customer'}},
  'one_to_many': {'shop.Customer': ['shop.Order']},
}


def _entity(name, fields=None, associations=None, table_name=None, exclude=(), short_name=None):
  return EntityMetadata(
    name=name,
    short_name=short_name or name,
    fields={key: FieldMapping(**value) for key, value in (fields or {}).items()},
    associations=dict(associations or {}),
    table_name=table_name,
    exclude_fields=tuple(exclude),
  )


@pytest.fixture
def entity():
  """Factory for entity descriptors: ``entity('A', {'id': {'type': 'integer', 'id': True}})``."""
  return _entity


@pytest.fixture
def order_document():
  return copy.deepcopy(ORDER_DOCUMENT)


@pytest.fixture
def sqlite_url(tmp_path):
  return f"sqlite:///{tmp_path / 'denormalizer.db'}"


@pytest.fixture
def service():
  handler = DenormalizeHandler(MigrationEmitter(SqlAlchemySchemaRepository()))
  return DenormalizerServiceImpl(handler)
