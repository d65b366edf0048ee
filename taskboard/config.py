from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import os

from dotenv import dotenv_values, load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

EMPTY_STRING = "empty string"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the process environment cannot produce valid settings."""


@dataclass(frozen=True)
class Settings:
    port: int
    database_url: str
    host: str = "0.0.0.0"
    env: str = ""
    log_level: str = "INFO"
    templates_dir: Path = field(default=TEMPLATES_DIR)
    static_dir: Path = field(default=STATIC_DIR)


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "")
    if len(value) == 0:
        raise ConfigError(f"{name}: {EMPTY_STRING}")
    return value


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT: invalid port {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"PORT: port out of range {port}")
    return port


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = None,
) -> Settings:
    """Build settings from environment variables.

    With ``ENV=dev`` a local ``.env`` file is loaded first; variables
    already present in the environment win over the file.
    """
    if environ is None:
        environ = os.environ

    env = environ.get("ENV", "")
    if env == "dev":
        path = dotenv_path or Path.cwd() / ".env"
        if not path.is_file():
            raise ConfigError(f"failed to load {path}: no such file")
        if environ is os.environ:
            load_dotenv(path, override=False)
        else:
            # Caller supplied its own mapping; layer the file underneath it.
            file_values = {k: v for k, v in dotenv_values(path).items() if v is not None}
            environ = {**file_values, **environ}

    port = _parse_port(_require(environ, "PORT"))
    database_url = _require(environ, "DATABASE_URL")

    log_level = (environ.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL: unknown level {log_level!r}")

    return Settings(
        port=port,
        database_url=database_url,
        host=environ.get("HOST") or "0.0.0.0",
        env=env,
        log_level=log_level,
    )
