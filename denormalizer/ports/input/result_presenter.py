"""Input port for formatting denormalization results."""
from __future__ import annotations

from typing import Any, Protocol

from denormalizer.application.queries.denormalize_result import DenormalizeResult


class ResultPresenter(Protocol):
  def present(self, result: DenormalizeResult) -> Any:
    ...

  def present_error(self, error: Exception) -> Any:
    ...
