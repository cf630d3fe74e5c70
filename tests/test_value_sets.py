"""Tests for value set accumulation."""
from __future__ import annotations

from denormalizer.domain.services.value_sets import ValueSetAccumulator


class TestValueSetAccumulator:
  def test_repeated_name_starts_next_occurrence(self):
    values = ValueSetAccumulator()
    values.add_value('name', 'x')
    values.add_value('name', 'y')
    values.add_value('other', 'z')
    assert values.get_values_array() == [{'name': 'x', 'other': 'z'}, {'name': 'y'}]

  def test_add_value_reports_occurrence(self):
    values = ValueSetAccumulator()
    assert [values.add_value('id', n) for n in range(3)] == [0, 1, 2]
    assert values.add_value('sku', 'a') == 0

  def test_names_keep_insertion_order_within_occurrence(self):
    values = ValueSetAccumulator()
    for name in ('c', 'a', 'b'):
      values.add_value(name, name.upper())
    assert list(values.get_values_array()[0]) == ['c', 'a', 'b']

  def test_empty(self):
    assert ValueSetAccumulator().get_values_array() == []
