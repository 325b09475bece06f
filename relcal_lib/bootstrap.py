"""Bootstrap helpers for relcal startup.

Ensures the data layout exists and a server configuration is present before
the application composes its services. Keeping this out of `relcal_lib.main`
keeps `create_app` focused on wiring.
"""
from pathlib import Path

import yaml

from relcal_lib.config.config import (
    DEFAULT_SERVER_CONFIG,
    load_server_config,
    save_server_config,
    server_config_path,
)


def bootstrap_server(data_dir, logger) -> dict:
    """Ensure `server_config.yml` exists under `data_dir` and return it.

    Parameters
    - data_dir: directory holding the documents, backups and config
    - logger: logger instance for informational messages

    A config file that cannot be read or parsed is reported and replaced by
    the defaults for this run; it is not overwritten.
    """
    Path(data_dir).mkdir(parents=True, exist_ok=True)
    cfg_path = server_config_path(data_dir)
    try:
        if not cfg_path.exists():
            logger.info("server_config missing; creating default %s", cfg_path)
            save_server_config(cfg_path, dict(DEFAULT_SERVER_CONFIG))
        server_cfg = load_server_config(cfg_path)
    except (KeyError, OSError, ValueError, yaml.YAMLError):
        logger.exception('Failed to load or create server_config; using defaults')
        server_cfg = dict(DEFAULT_SERVER_CONFIG)

    return server_cfg
