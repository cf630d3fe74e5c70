"""JSON presenter implementation."""
from __future__ import annotations

import json
from typing import Any, Dict

from denormalizer.application.queries.denormalize_result import DenormalizeResult
from denormalizer.ports.input.result_presenter import ResultPresenter


class JsonPresenter(ResultPresenter):
  def payload(self, result: DenormalizeResult) -> Dict[str, Any]:
    return {
      'status': result.status.value,
      'table_name': result.table_name,
      'columns': result.columns,
      'indexes': result.indexes,
      'event_time_column': result.event_time_column,
      'one_to_many': {
        source: {str(key): target for key, target in relations.items()}
        for source, relations in result.one_to_many.items()
      },
      'statements': result.statements,
      'execution_time': result.execution_time,
      'timestamp': result.timestamp.isoformat(),
      'error': result.error,
    }

  def present(self, result: DenormalizeResult) -> str:
    return json.dumps(self.payload(result), ensure_ascii=False, indent=2)

  def present_error(self, error: Exception) -> str:
    return json.dumps({'status': 'error', 'error': str(error)}, ensure_ascii=False, indent=2)
