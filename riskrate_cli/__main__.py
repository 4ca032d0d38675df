from __future__ import annotations

import logging
import sys

from riskrate_cli.cli import main as cli_main
from riskrate_cli.exceptions import RiskRateError

logger = logging.getLogger("riskrate_cli")


def main() -> None:
    try:
        cli_main()
    except RiskRateError as exc:
        # Traceback only shows up with --verbose.
        logger.debug("%s failed", type(exc).__name__, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
