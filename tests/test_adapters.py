"""Tests for the CLI and HTTP adapters and the presenters."""
from __future__ import annotations

import json

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from denormalizer.adapters.input.api.fastapi_adapter import FastAPIAdapter
from denormalizer.adapters.input.cli.cli_adapter import CLIAdapter
from denormalizer.adapters.input.document_loader import command_from_document
from denormalizer.adapters.presentation.json_presenter import JsonPresenter
from denormalizer.adapters.presentation.text_presenter import TextPresenter
from denormalizer.application.queries.denormalize_result import DenormalizeResult, ResultStatus


@pytest.fixture
def document_path(tmp_path, order_document):
  path = tmp_path / 'order.json'
  path.write_text(json.dumps(order_document), encoding='utf-8')
  return str(path)


class TestCLI:
  def test_schema(self, service, document_path):
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['schema', document_path])
    assert result.exit_code == 0, result.output
    assert 'TABLE order_customer__customer' in result.output
    assert '  - Order__id: integer, PK' in result.output
    assert '  - Order__created_at: datetime, EVENT TIME' in result.output
    assert 'password' not in result.output

  def test_migrate_requires_url(self, service, document_path):
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['migrate', document_path])
    assert result.exit_code != 0
    assert '--database-url' in result.output

  def test_migrate(self, service, document_path, sqlite_url):
    cli = CLIAdapter(service, TextPresenter(), default_database_url=sqlite_url).build()
    result = CliRunner().invoke(cli, ['migrate', document_path])
    assert result.exit_code == 0, result.output
    assert 'MIGRATION' in result.output
    assert 'CREATE TABLE order_customer__customer' in result.output

  def test_invalid_document(self, service, tmp_path):
    path = tmp_path / 'empty.json'
    path.write_text('{"structure": {}}', encoding='utf-8')
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['schema', str(path)])
    assert result.exit_code != 0
    assert 'structure' in result.output

  def test_schema_from_mapped_class(self, service):
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['schema', '--model', 'orm_models:Order'])
    assert result.exit_code == 0, result.output
    assert 'TABLE order_customer__customer_lines__line' in result.output
    assert '  - Order__lines__line__quantity: integer' in result.output
    assert 'email' not in result.output

  def test_migrate_from_mapped_class(self, service, sqlite_url):
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['migrate', '--model', 'orm_models:Order', '--database-url', sqlite_url])
    assert result.exit_code == 0, result.output
    assert 'CREATE TABLE order_customer__customer_lines__line' in result.output

  def test_document_and_model_are_exclusive(self, service, document_path):
    cli = CLIAdapter(service, TextPresenter()).build()
    assert CliRunner().invoke(cli, ['schema']).exit_code == 2
    assert CliRunner().invoke(cli, ['schema', document_path, '--model', 'orm_models:Order']).exit_code == 2

  def test_unknown_model(self, service):
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['schema', '--model', 'orm_models:Invoice'])
    assert result.exit_code == 1
    assert 'no attribute Invoice' in result.output

  @pytest.mark.parametrize('breakage, message', [
    (lambda document: document['structure'].update({'shop.Customer': None}), 'structure entry for shop.Customer'),
    (lambda document: document['entities']['shop.Order']['fields'].update({'id': {'id': True}}), 'needs a type'),
  ])
  def test_malformed_document_is_reported(self, service, tmp_path, order_document, breakage, message):
    breakage(order_document)
    path = tmp_path / 'broken.json'
    path.write_text(json.dumps(order_document), encoding='utf-8')
    cli = CLIAdapter(service, TextPresenter()).build()
    result = CliRunner().invoke(cli, ['schema', str(path)])
    assert result.exit_code == 1
    assert message in result.output
    assert not isinstance(result.exception, (KeyError, AttributeError))


class TestHTTP:
  @pytest.fixture
  def client(self, service):
    return TestClient(FastAPIAdapter(service, JsonPresenter()).app)

  def test_health(self, client):
    assert client.get('/health').json() == {'status': 'healthy'}

  def test_schema(self, client, order_document):
    response = client.post('/api/v1/schema', json=order_document)
    assert response.status_code == 200
    body = response.json()
    assert body['status'] == 'success'
    assert body['table_name'] == 'order_customer__customer'
    assert body['indexes'] == ['Order__id']
    assert body['one_to_many'] == {'shop.Customer': {'0': 'shop.Order'}}

  def test_empty_structure_is_rejected(self, client, order_document):
    order_document['structure'] = {}
    assert client.post('/api/v1/schema', json=order_document).status_code == 422

  def test_unknown_root_is_rejected(self, client, order_document):
    order_document['structure'] = {'shop.Invoice': {}}
    response = client.post('/api/v1/schema', json=order_document)
    assert response.status_code == 422
    assert 'shop.Invoice' in response.json()['detail']

  def test_migration(self, client, order_document, sqlite_url):
    response = client.post('/api/v1/migration', json={**order_document, 'database_url': sqlite_url})
    assert response.status_code == 200
    statements = response.json()['statements']
    assert len(statements) == 1
    assert statements[0].startswith('CREATE TABLE order_customer__customer')


class TestPresenters:
  def test_json_presenter(self, service, order_document):
    result = service.describe_table(command_from_document(order_document))
    payload = json.loads(JsonPresenter().present(result))
    assert payload['event_time_column'] == 'Order__created_at'
    assert payload['columns'][0]['name'] == 'Order__id'
    assert payload['error'] is None

  def test_json_presenter_keeps_relation_keys(self):
    result = DenormalizeResult(
      status=ResultStatus.SUCCESS,
      one_to_many={'shop.Order': {'lines': 'shop.Line', 2: 'shop.Refund'}},
    )
    payload = json.loads(JsonPresenter().present(result))
    assert payload['one_to_many'] == {'shop.Order': {'lines': 'shop.Line', '2': 'shop.Refund'}}

  def test_text_presenter_error(self):
    assert TextPresenter().present_error(ValueError('boom')) == 'ERROR: boom'
