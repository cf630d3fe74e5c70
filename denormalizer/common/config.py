"""Application-level configuration utilities."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from denormalizer.domain.entities.table_group import DENORMALIZE_FIELD_DELIMITER, DENORMALIZE_TABLE_DELIMITER


@dataclass(frozen=True)
class Settings:
  """Immutable application settings loaded from environment variables."""

  database_url: Optional[str] = None
  field_delimiter: str = DENORMALIZE_FIELD_DELIMITER
  table_delimiter: str = DENORMALIZE_TABLE_DELIMITER
  log_level: str = 'WARNING'


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Load settings from environment variables once per process."""
  env_path = Path(__file__).resolve().parents[2] / '.env'
  if env_path.exists():
    load_dotenv(env_path)
  else:
    load_dotenv()

  field_delimiter = getenv('DN_FIELD_DELIMITER', DENORMALIZE_FIELD_DELIMITER)
  table_delimiter = getenv('DN_TABLE_DELIMITER', DENORMALIZE_TABLE_DELIMITER)
  if not field_delimiter or not table_delimiter:
    raise ValueError('DN_FIELD_DELIMITER and DN_TABLE_DELIMITER must not be empty')

  return Settings(
    database_url=getenv('DATABASE_URL'),
    field_delimiter=field_delimiter,
    table_delimiter=table_delimiter,
    log_level=getenv('DN_LOG_LEVEL', 'WARNING').upper(),
  )
