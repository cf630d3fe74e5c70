"""CLI adapter for interacting with the denormalizer service."""
from __future__ import annotations

from typing import Optional

import click

from denormalizer.adapters.input.document_loader import command_from_document, load_document
from denormalizer.adapters.input.model_loader import command_from_model
from denormalizer.application.commands.denormalize_command import DenormalizeCommand
from denormalizer.application.queries.denormalize_result import ResultStatus
from denormalizer.ports.input.denormalizer_service import DenormalizerService
from denormalizer.ports.input.result_presenter import ResultPresenter

_document_argument = click.argument('document', required=False, type=click.Path(exists=True, dir_okay=False))
_model_option = click.option('--model', default=None, metavar='MODULE:CLASS', help='Root SQLAlchemy mapped class')


class CLIAdapter:
  def __init__(self, service: DenormalizerService, presenter: ResultPresenter, default_database_url: Optional[str] = None):
    self._service = service
    self._presenter = presenter
    self._default_database_url = default_database_url

  def build(self) -> click.Group:
    cli = click.Group(help='Build denormalized tables from entity structure documents or mapped classes.')

    @cli.command('schema')
    @_document_argument
    @_model_option
    def schema(document: Optional[str], model: Optional[str]) -> None:
      """Print the denormalized table described by DOCUMENT or --model."""
      command = self._load(document, model, None)
      self._emit(self._service.describe_table(command))

    @cli.command('migrate')
    @_document_argument
    @_model_option
    @click.option('--database-url', default=None, help='SQLAlchemy connection URL (defaults to DATABASE_URL)')
    def migrate(document: Optional[str], model: Optional[str], database_url: Optional[str]) -> None:
      """Print the DDL that brings the database in line with DOCUMENT or --model."""
      url = database_url or self._default_database_url
      if not url:
        raise click.ClickException('--database-url or DATABASE_URL is required')
      command = self._load(document, model, url)
      self._emit(self._service.plan_migration(command))

    return cli

  def run(self) -> None:
    self.build()()

  @staticmethod
  def _load(document: Optional[str], model: Optional[str], database_url: Optional[str]) -> DenormalizeCommand:
    if (document is None) == (model is None):
      raise click.UsageError('Give either DOCUMENT or --model')
    try:
      if model is not None:
        return command_from_model(model, database_url=database_url)
      return command_from_document(load_document(document), database_url=database_url)
    except ValueError as exc:
      raise click.ClickException(str(exc)) from exc

  def _emit(self, result) -> None:
    if result.status == ResultStatus.ERROR:
      raise click.ClickException(result.error or 'denormalization failed')
    click.echo(self._presenter.present(result))
