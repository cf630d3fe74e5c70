"""CLI entrypoint for the denormalizer."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from denormalizer.adapters.input.cli.cli_adapter import CLIAdapter
from denormalizer.adapters.presentation.text_presenter import TextPresenter
from denormalizer.common.config import get_settings
from denormalizer.common.container import create_denormalizer_service


def main() -> None:
  settings = get_settings()
  logging.basicConfig(level=settings.log_level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
  service = create_denormalizer_service()
  CLIAdapter(service, TextPresenter(), default_database_url=settings.database_url).run()


if __name__ == '__main__':
  main()
