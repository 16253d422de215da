"""
Gateway configuration
Immutable settings loaded once at startup from config.toml plus environment overrides
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import tomllib

from .errors import ConfigError


DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_PATH_ENV = "MEDIAARCHIVE_CONFIG"
ENV_PREFIX = "MEDIAARCHIVE_"

REQUIRED_KEYS = (
    "qb-url",
    "qb-username",
    "qb-password",
    "access-token",
    "passkey",
    "save-root",
)

DEFAULTS: Dict[str, Any] = {
    "search-url": "https://api.hddolby.com/api/v1/torrent/search",
    "download-url": "https://www.hddolby.com/download.php",
    "host": "127.0.0.1",
    "port": 3000,
    "request-timeout-seconds": 30.0,
    "log-level": "info",
}


@dataclass(frozen=True)
class Config:
    """Process-wide settings shared by every component"""

    engine_url: str
    engine_username: str
    engine_password: str
    access_token: str
    passkey: str
    save_root: Path
    search_url: str = DEFAULTS["search-url"]
    download_url: str = DEFAULTS["download-url"]
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]
    request_timeout_seconds: float = DEFAULTS["request-timeout-seconds"]
    log_level: str = DEFAULTS["log-level"]

    def __repr__(self) -> str:
        # Secrets stay out of logs and tracebacks.
        return (
            f"Config(engine_url={self.engine_url!r}, save_root={str(self.save_root)!r}, "
            f"host={self.host!r}, port={self.port})"
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build a Config from parsed TOML keys.

        Any key can be overridden by an environment variable named
        MEDIAARCHIVE_<KEY> with dashes replaced by underscores.
        """
        environ = os.environ if environ is None else environ
        merged: Dict[str, Any] = {**DEFAULTS, **dict(data or {})}
        for key in list(REQUIRED_KEYS) + list(DEFAULTS):
            env_name = ENV_PREFIX + key.replace("-", "_").upper()
            value = str(environ.get(env_name, "") or "").strip()
            if value:
                merged[key] = value

        missing = [key for key in REQUIRED_KEYS if not str(merged.get(key, "") or "").strip()]
        if missing:
            raise ConfigError(f"Missing required config keys: {', '.join(missing)}")

        save_root = Path(str(merged["save-root"])).expanduser()
        if not save_root.is_absolute():
            raise ConfigError(f"save-root must be an absolute path, got {str(save_root)!r}")

        try:
            port = int(merged["port"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"port must be an integer, got {merged['port']!r}") from exc
        if not 0 < port < 65536:
            raise ConfigError(f"port out of range: {port}")

        try:
            timeout = float(merged["request-timeout-seconds"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"request-timeout-seconds must be a number, got {merged['request-timeout-seconds']!r}"
            ) from exc

        try:
            save_root = save_root.resolve()
        except (OSError, RuntimeError) as exc:
            raise ConfigError(f"save-root cannot be resolved: {exc}") from exc

        engine_url = str(merged["qb-url"]).strip()
        if not engine_url.startswith(("http://", "https://")):
            engine_url = "http://" + engine_url

        return cls(
            engine_url=engine_url,
            engine_username=str(merged["qb-username"]),
            engine_password=str(merged["qb-password"]),
            access_token=str(merged["access-token"]),
            passkey=str(merged["passkey"]),
            save_root=save_root,
            search_url=str(merged["search-url"]).strip(),
            download_url=str(merged["download-url"]).strip(),
            host=str(merged["host"]).strip(),
            port=port,
            request_timeout_seconds=max(1.0, timeout),
            log_level=str(merged["log-level"]).strip().lower() or "info",
        )


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Read the TOML config file and build the immutable Config"""
    environ = os.environ if environ is None else environ
    if path is None:
        path = Path(str(environ.get(CONFIG_PATH_ENV, "") or "").strip() or DEFAULT_CONFIG_FILE)
    path = Path(path).expanduser()

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    return Config.from_mapping(data, environ)
