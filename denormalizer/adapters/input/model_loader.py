"""Turns a SQLAlchemy declarative class (``module:Class``) into a denormalize command."""
from __future__ import annotations

import importlib
from functools import reduce
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper

from denormalizer.adapters.input.document_loader import DenormalizerConfigError
from denormalizer.adapters.output.metadata.sqlalchemy_metadata_provider import (
  SqlAlchemyMetadataProvider,
  entity_type_of,
)
from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.domain.services.schema_traversal import entity_types
from denormalizer.ports.output.metadata_provider import build_entity_metadata


def import_mapper(reference: str) -> Mapper:
  module_name, _, attribute = reference.partition(':')
  if not module_name or not attribute:
    raise DenormalizerConfigError(f'{reference!r} is not of the form module:Class')
  try:
    module = importlib.import_module(module_name)
  except ImportError as exc:
    raise DenormalizerConfigError(f'Cannot import {module_name}: {exc}') from exc
  try:
    target = reduce(getattr, attribute.split('.'), module)
  except AttributeError as exc:
    raise DenormalizerConfigError(f'{module_name} has no attribute {attribute}') from exc
  try:
    mapper = inspect(target)
  except NoInspectionAvailable as exc:
    raise DenormalizerConfigError(f'{reference} is not a mapped class') from exc
  if not isinstance(mapper, Mapper):
    raise DenormalizerConfigError(f'{reference} is not a mapped class')
  return mapper


def command_from_model(reference: str, database_url: Optional[str] = None) -> DenormalizeCommand:
  """Build a command rooted at a mapped class.

  Every class of the root's registry is made available to the metadata
  provider; the structure schema is the spanning tree of relationships
  reachable from the root.
  """
  mapper = import_mapper(reference)
  mapped_classes = sorted((m.class_ for m in mapper.registry.mappers), key=entity_type_of)
  provider = SqlAlchemyMetadataProvider(mapped_classes)
  structure = provider.structure_schema(mapper.class_)
  return DenormalizeCommand(
    structure_schema=structure,
    entities=build_entity_metadata(provider, entity_types(structure)),
    one_to_many=provider.one_to_many_relations(),
    database_url=database_url,
  )
