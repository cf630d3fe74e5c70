"""Plain text presenter for terminal output."""
from __future__ import annotations

from denormalizer.application.queries.denormalize_result import DenormalizeResult
from denormalizer.ports.input.result_presenter import ResultPresenter


class TextPresenter(ResultPresenter):
  def present(self, result: DenormalizeResult) -> str:
    if result.error:
      return self.present_error(result.error)

    lines = [
      '=' * 60,
      f'TABLE {result.table_name or "(empty)"}',
      '=' * 60,
    ]
    primary_key = set(result.indexes)
    for column in result.columns:
      column_meta = [column['type']]
      if column['name'] in primary_key:
        column_meta.append('PK')
      if column['name'] == result.event_time_column:
        column_meta.append('EVENT TIME')
      if column['inverse_property_name']:
        column_meta.append(f"via {column['inverse_property_name']}")
      lines.append(f"  - {column['name']}: {', '.join(column_meta)}")
    lines.append('')

    if result.statements:
      lines.extend([
        '=' * 60,
        'MIGRATION',
        '=' * 60,
      ])
      lines.extend(f'{statement};' for statement in result.statements)
      lines.append('')

    lines.append(f'Execution time: {result.execution_time:.3f}s')
    return '\n'.join(lines)

  def present_error(self, error) -> str:
    return f'ERROR: {error}'
