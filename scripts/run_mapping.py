"""
Validate a mapping configuration and run an import from the CLI.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from app.config import get_mapping_settings
from app.domain.target_schema import build_registry
from app.services.mapping_service import MappingService


def main() -> int:
    parser = argparse.ArgumentParser(description="Execute a mapping configuration against a source file.")
    parser.add_argument(
        "--config",
        dest="config",
        required=True,
        help="Path to a JSON mapping configuration.",
    )
    parser.add_argument(
        "--source",
        dest="source",
        default=None,
        help="Optional CSV or JSON source file. Omit to only validate the configuration.",
    )
    parser.add_argument(
        "--catalog",
        dest="catalog",
        default=None,
        help="Target schema catalog: 'catalog' or 'orders'. Defaults to MAPPING_TARGET_CATALOG.",
    )
    parser.add_argument(
        "--strict-csv",
        dest="strict_csv",
        action="store_true",
        help="Parse CSV with quote support instead of a plain comma split.",
    )
    args = parser.parse_args()

    settings = get_mapping_settings()
    service = MappingService(
        registry=build_registry(args.catalog or settings.target_catalog),
        strict_csv=args.strict_csv or settings.strict_csv,
    )

    candidate = json.loads(Path(args.config).read_text(encoding="utf-8"))
    source_file = Path(args.source).read_text(encoding="utf-8") if args.source else None

    outcome = service.execute_config(candidate, source_file=source_file)
    print(json.dumps(outcome.to_dict(), indent=2, default=str))
    return 0 if outcome.valid else 1


if __name__ == "__main__":
    raise SystemExit(main())
