"""Concrete implementation of the denormalizer service."""
from __future__ import annotations

from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.application.handlers.denormalize_handler import DenormalizeHandler
from denormalizer.application.queries.denormalize_result import DenormalizeResult
from denormalizer.ports.input.denormalizer_service import DenormalizerService


class DenormalizerServiceImpl(DenormalizerService):
  def __init__(self, handler: DenormalizeHandler):
    self._handler = handler

  def describe_table(self, command: DenormalizeCommand) -> DenormalizeResult:
    return self._handler.handle(command)

  def plan_migration(self, command: DenormalizeCommand) -> DenormalizeResult:
    return self._handler.handle(command, with_migration=True)
