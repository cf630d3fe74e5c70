"""Input port defining the denormalizer service contract."""
from __future__ import annotations

from typing import Protocol

from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.application.queries.denormalize_result import DenormalizeResult


class DenormalizerService(Protocol):
  def describe_table(self, command: DenormalizeCommand) -> DenormalizeResult:
    ...

  def plan_migration(self, command: DenormalizeCommand) -> DenormalizeResult:
    ...
