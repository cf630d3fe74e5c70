"""FastAPI adapter exposing HTTP endpoints."""
from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator

from denormalizer.adapters.input.document_loader import command_from_document
from denormalizer.application.queries.denormalize_result import DenormalizeResult, ResultStatus
from denormalizer.ports.input.denormalizer_service import DenormalizerService
from denormalizer.ports.input.result_presenter import ResultPresenter


class FieldPayload(BaseModel):
  type: str = Field(..., description='Scalar type name, e.g. integer, string, datetime')
  id: bool = Field(default=False, description='Whether the field is an identifier')
  length: Optional[int] = Field(default=None, ge=1)
  precision: Optional[int] = Field(default=None, ge=1)
  scale: Optional[int] = Field(default=None, ge=0)
  nullable: bool = True


class EntityPayload(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  short_name: Optional[str] = Field(default=None, description='Defaults to the last dotted part of the type')
  table_name: Optional[str] = Field(default=None, description='Overrides the short name in table and column names')
  exclude_fields: List[str] = Field(default_factory=list)
  scalar_fields: Dict[str, FieldPayload] = Field(default_factory=dict, alias='fields')
  associations: Dict[str, str] = Field(default_factory=dict)


class StructurePayload(BaseModel):
  """Entity definitions plus the tree to denormalize; the first structure key is the root."""

  entities: Dict[str, EntityPayload]
  structure: Dict[str, Dict[str, str]]
  one_to_many: Dict[str, List[str]] = Field(default_factory=dict)

  @field_validator('structure')
  @classmethod
  def validate_structure(cls, v):
    if not v:
      raise ValueError('structure must declare at least the root entity')
    return v

  def document(self) -> dict:
    return self.model_dump(by_alias=True)


class MigrationPayload(StructurePayload):
  database_url: str = Field(..., description='SQLAlchemy connection URL')


class FastAPIAdapter:
  def __init__(self, service: DenormalizerService, presenter: ResultPresenter):
    self._service = service
    self._presenter = presenter
    self.app = FastAPI(
      title='ORM Denormalizer API',
      version='0.1.0',
      description='Computes flattened tables for trees of related entities and plans their migrations.',
    )
    self._configure_routes()

  def _configure_routes(self) -> None:
    @self.app.post('/api/v1/schema', tags=['Schema'])
    def describe_table(payload: StructurePayload):
      """Compute the denormalized table for a structure."""
      command = self._command(payload, None)
      return self._respond(self._service.describe_table(command))

    @self.app.post('/api/v1/migration', tags=['Schema'])
    def plan_migration(payload: MigrationPayload):
      """Compute the DDL bringing ``database_url`` in line with the structure."""
      command = self._command(payload, payload.database_url)
      return self._respond(self._service.plan_migration(command))

    @self.app.get('/health', tags=['Health'])
    async def health():
      """Health check endpoint."""
      return {'status': 'healthy'}

  @staticmethod
  def _command(payload: StructurePayload, database_url: Optional[str]):
    try:
      return command_from_document(payload.document(), database_url=database_url)
    except ValueError as exc:
      raise HTTPException(status_code=422, detail=str(exc))

  def _respond(self, result: DenormalizeResult) -> Response:
    if result.status == ResultStatus.ERROR:
      raise HTTPException(status_code=500, detail=result.error)
    return Response(content=self._presenter.present(result), media_type='application/json')
