"""Server configuration stored as YAML under `<data_dir>/config/server_config.yml`.

The file is optional; missing keys fall back to `DEFAULT_SERVER_CONFIG`.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from relcal_lib.storage.serializer import YAMLSerializer

logger = logging.getLogger(__name__)

CONFIG_DIR = "config"
CONFIG_FILE = "server_config.yml"

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    'schema_version': 1,
    'server_name': None,
    'log_level': 'INFO',
    'max_backups': 10,
}

_serializer = YAMLSerializer()


def server_config_path(data_dir: str | Path) -> Path:
    return Path(data_dir) / CONFIG_DIR / CONFIG_FILE


def load_server_config(path: str | Path) -> Dict[str, Any]:
    """Load the YAML server config at `path` merged over the defaults.

    Raises KeyError when the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise KeyError(str(p))
    raw = _serializer.load(p.read_bytes()) or {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring server config %s: top-level value is not a mapping", p)
        raw = {}
    cfg = dict(DEFAULT_SERVER_CONFIG)
    cfg.update(raw)
    return cfg


def save_server_config(path: str | Path, cfg: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(_serializer.dump(cfg))


def max_backups_from(cfg: Optional[Dict[str, Any]], default: int) -> int:
    val = (cfg or {}).get('max_backups')
    if isinstance(val, int) and not isinstance(val, bool) and val > 0:
        return val
    return default
