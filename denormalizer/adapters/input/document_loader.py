"""Turns a structure document (JSON) into a denormalize command."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from denormalizer.adapters.output.metadata.mapping_metadata_provider import MappingMetadataProvider
from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.domain.services.schema_traversal import entity_types
from denormalizer.ports.output.metadata_provider import build_entity_metadata


class DenormalizerConfigError(ValueError):
  """Raised when a structure document cannot describe a table."""


def load_document(path: Union[str, Path]) -> Mapping[str, Any]:
  try:
    return json.loads(Path(path).read_text(encoding='utf-8'))
  except json.JSONDecodeError as exc:
    raise DenormalizerConfigError(f'{path} is not valid JSON: {exc}') from exc


def command_from_document(document: Mapping[str, Any], database_url: Optional[str] = None) -> DenormalizeCommand:
  """Build a command from ``{'entities': ..., 'structure': ..., 'one_to_many': ...}``."""
  structure = document.get('structure')
  if not isinstance(structure, Mapping) or not structure:
    raise DenormalizerConfigError("document needs a non-empty 'structure' mapping")
  for class_name, targets in structure.items():
    if not isinstance(targets, Mapping):
      raise DenormalizerConfigError(f'structure entry for {class_name} must map properties to entity types')

  entities = document.get('entities') or {}
  _check_entities(entities)
  provider = MappingMetadataProvider(entities)
  root = next(iter(structure))
  if not provider.has_entity(root):
    raise DenormalizerConfigError(f'No entity definition for root type {root}')

  known_types = [name for name in entity_types(structure) if provider.has_entity(name)]
  return DenormalizeCommand(
    structure_schema=structure,
    entities=build_entity_metadata(provider, known_types),
    one_to_many=document.get('one_to_many') or {},
    database_url=database_url,
  )


def _check_entities(entities: Any) -> None:
  if not isinstance(entities, Mapping):
    raise DenormalizerConfigError("'entities' must map entity types to definitions")
  for entity_type, definition in entities.items():
    if not isinstance(definition, Mapping):
      raise DenormalizerConfigError(f'definition of {entity_type} must be a mapping')
    fields = definition.get('fields') or {}
    if not isinstance(fields, Mapping):
      raise DenormalizerConfigError(f'fields of {entity_type} must be a mapping')
    for field_name, field in fields.items():
      if not isinstance(field, Mapping) or 'type' not in field:
        raise DenormalizerConfigError(f'field {entity_type}.{field_name} needs a type')
