"""Application-level denormalization result representation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ResultStatus(str, Enum):
  SUCCESS = 'success'
  ERROR = 'error'


@dataclass
class DenormalizeResult:
  status: ResultStatus
  table_name: str = ''
  columns: List[Dict[str, Any]] = field(default_factory=list)
  indexes: List[str] = field(default_factory=list)
  event_time_column: Optional[str] = None
  one_to_many: Dict[str, Any] = field(default_factory=dict)
  statements: List[str] = field(default_factory=list)
  execution_time: float = 0.0
  timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
  error: Optional[str] = None
