"""Generate the NACHA file for one ACH batch from the command line.

Usage:
    python scripts/generate_nacha.py batch-0001 acme 2024-06-01
    NACHAGEN_STORAGE_BACKEND=local python scripts/generate_nacha.py ...
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date

from nachagen.core.config import AppSettings
from nachagen.core.logging import setup_logging
from nachagen.services.generator import create_generator


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a NACHA ACH file for a pending batch")
    parser.add_argument("batch_id", help="ACH batch id")
    parser.add_argument("company_id", help="Company whose ACH settings originate the file")
    parser.add_argument("effective_date", type=date.fromisoformat, help="Settlement date (YYYY-MM-DD)")
    args = parser.parse_args(argv)

    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)

    result = create_generator(settings).generate(args.batch_id, args.company_id, args.effective_date)

    if not result.success or result.nacha_file is None:
        print(json.dumps({
            "success": False,
            "error": result.error_kind,
            "violations": result.violations,
            "retryable": result.retryable,
        }, indent=2))
        return 1

    summary = result.nacha_file.summary
    print(json.dumps({
        "success": True,
        "file_name": result.nacha_file.file_name,
        "storage_path": result.storage_path,
        "summary": summary.model_dump(mode="json"),
    }, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
