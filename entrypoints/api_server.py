"""API server entrypoint."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from denormalizer.adapters.input.api.fastapi_adapter import FastAPIAdapter
from denormalizer.adapters.presentation.json_presenter import JsonPresenter
from denormalizer.common.config import get_settings
from denormalizer.common.container import create_denormalizer_service


def get_app():
  service = create_denormalizer_service()
  presenter = JsonPresenter()
  adapter = FastAPIAdapter(service, presenter)
  return adapter.app


def main() -> None:
  logging.basicConfig(level=get_settings().log_level)
  uvicorn.run(get_app(), host='0.0.0.0', port=8000)


if __name__ == '__main__':
  main()
