"""Command-line entry point: export the table configured in the environment."""

import logging
import sys

from dynexport.config import ExportSettings
from dynexport.errors import ExportError
from dynexport.execution.pipeline import run_export

logger = logging.getLogger("dynexport")


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        result = run_export(ExportSettings.from_env())
    except ExportError as exc:
        logger.error("Export failed at step %s: %s", exc.step, exc)
        return 1

    print(f"\nSuccessfully uploaded DynamoDB file to {result.uri}", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
