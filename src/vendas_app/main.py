from __future__ import annotations

import logging

from .app.bootstrap import ConsoleBootstrap
from .app.logs import configure_logging
from .app.state import Route

logger = logging.getLogger(__name__)


def run() -> int:
    configure_logging()
    bootstrap = ConsoleBootstrap()
    result = bootstrap.start()
    if result.route is Route.LOGIN:
        logger.info("console_ready_login_required")
    elif result.route is Route.PROFILE_SETUP:
        logger.info("console_ready_profile_setup_required")
    else:
        logger.info("console_ready", extra={"screens": [item.name for item in bootstrap.visible_navigation()]})
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
