"""Process entry point: load config once, build the app, serve it with uvicorn."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import uvicorn

from ..core.config import load_config
from ..core.errors import ConfigError
from .app import create_app
from .runtime import build_runtime


logger = logging.getLogger("mediaarchive")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mediaarchive", description="MediaArchive download gateway")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to config.toml")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("%s", exc)
        return 2

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Serving %s on %s:%s", config.save_root, config.host, config.port)

    app = create_app(build_runtime(config))
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
