"""Tests for the one-to-many relation index."""
from __future__ import annotations

from denormalizer.domain.entities.table_group import TableGroup
from denormalizer.domain.services.relation_index import build_one_to_many_index, has_relation

SCHEMA = {
  'Order': {'lines': 'Line', 'customer': 'Customer'},
  'Line': {'product': 'Product'},
}


class TestBuildIndex:
  def test_keeps_only_targets_declared_as_schema_keys(self):
    raw = {'Order': ['Line', 'Payment'], 'Customer': ['Order'], 'Category': ['Product']}
    index = build_one_to_many_index(SCHEMA, raw)
    assert index == {'Order': {0: 'Line'}, 'Customer': {0: 'Order'}}

  def test_children_are_indexed_before_parents(self):
    raw = {'Customer': ['Order'], 'Order': ['Line']}
    assert list(build_one_to_many_index(SCHEMA, raw)) == ['Order', 'Customer']

  def test_original_positions_and_keys_are_preserved(self):
    raw = {'Order': ['Payment', 'Line'], 'Customer': {'orders': 'Order', 'tickets': 'Ticket'}}
    index = build_one_to_many_index(SCHEMA, raw)
    assert index == {'Order': {1: 'Line'}, 'Customer': {'orders': 'Order'}}

  def test_empty_inputs(self):
    assert build_one_to_many_index({}, {'Order': ['Line']}) == {}
    assert build_one_to_many_index(SCHEMA, {}) == {}


class TestRelationLookup:
  def test_has_relation(self):
    index = build_one_to_many_index(SCHEMA, {'Order': ['Line', 'Payment']})
    assert has_relation(index, 'Order', 'Line')
    assert not has_relation(index, 'Order', 'Payment')
    assert not has_relation(index, 'Line', 'Order')

  def test_table_group_exposes_index(self, entity):
    group = TableGroup(SCHEMA, {'Order': entity('Order')}, {'Order': ['Line'], 'Customer': ['Order']})
    assert group.get_one_to_many_relation_schema() == {'Order': {0: 'Line'}, 'Customer': {0: 'Order'}}
    assert group.has_one_to_many_relation('Customer', 'Order')
    assert not group.has_one_to_many_relation('Order', 'Customer')
