import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from sqlalchemy.engine import make_url

from upl_ingestor.commons.errors import ConfigError
from upl_ingestor.commons.logger import logger
from upl_ingestor.commons.types import Settings

DEFAULT_CONFIG_PATH = "upl_ingestor/configs/settings.yaml"

DEFAULT_SETTINGS_YAML = """\
paths:
  sources:
    - ./SOURCE_DIR
  archive: ./ARCHIVE_DIR
  logs_root: ./LOG_DIR
  ledger: ./BLD_RESULT.csv

polling:
  interval_seconds: 60
  filename_glob: "*.upl"
  encoding: utf-8

archive:
  partition_by_date: true

sinks:
  enabled:
    - csv
  csv_encoding: utf-8

database:
  url: sqlite:///BLD_RESULT.db
  table: BLD_RESULT
  create_table: true

logging:
  level: INFO
  retention_days: 14
  console: true
"""


def resource_path(relative_path: str) -> str:
    """Devuelve la ruta absoluta a un recurso empaquetado (solo lectura), ya sea .exe o desarrollo"""
    if hasattr(sys, "_MEIPASS"):
        # Si es un ejecutable generado por PyInstaller
        base_path = sys._MEIPASS
    else:
        base_path = os.path.abspath(".")

    return os.path.join(base_path, relative_path)


def base_dir() -> Path:
    """Carpeta de datos: junto al .exe si está congelado, si no el cwd.

    No usar _MEIPASS aquí: es temporal y se borra al salir.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(os.path.abspath("."))


def _resolve(base: Path, p: str) -> str:
    path = Path(p).expanduser()
    if not path.is_absolute():
        path = base / path
    return str(path.resolve())


def _resolve_sqlite_url(base: Path, url: str) -> str:
    # sqlite:///BLD_RESULT.db es relativo al cwd para SQLAlchemy; se ancla a la carpeta base
    u = make_url(url)
    db = u.database
    if not u.drivername.startswith("sqlite") or not db or db == ":memory:" or db.startswith("file:"):
        return url
    return u.set(database=_resolve(base, db)).render_as_string(hide_password=False)


def _resolve_paths(settings: Settings, base: Path) -> Settings:
    paths = settings.paths
    paths.sources = [_resolve(base, s) for s in paths.sources]
    paths.archive = _resolve(base, paths.archive)
    paths.logs_root = _resolve(base, paths.logs_root)
    paths.ledger = _resolve(base, paths.ledger)
    if settings.database is not None:
        settings.database.url = _resolve_sqlite_url(base, settings.database.url)
    return settings


def _default_config_text() -> str:
    # Si el .exe trae settings.yaml empaquetado se usa como plantilla
    bundled = Path(resource_path(DEFAULT_CONFIG_PATH))
    if bundled.is_file():
        return bundled.read_text(encoding="utf-8")
    return DEFAULT_SETTINGS_YAML


def load_settings(path: Optional[str] = None) -> Settings:
    """Carga settings.yaml una sola vez al arrancar.

    Si el archivo no existe se escribe uno con valores por defecto (junto al
    .exe o en el cwd) y se usa. Las rutas relativas y las URLs sqlite
    relativas se resuelven contra esa misma carpeta base.
    """
    base = base_dir()
    config_path = Path(path or os.getenv("UPL_INGESTOR_CONFIG") or base / DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        try:
            template = _default_config_text()
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(template, encoding="utf-8")
        except OSError as ex:
            raise ConfigError(f"No se pudo crear config por defecto en {config_path}: {ex}") from ex
        logger.warning(f"No se encontró {config_path}; se creó configuración por defecto")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as ex:
        raise ConfigError(f"No se pudo leer {config_path}: {ex}") from ex

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} no contiene un mapa de configuración")

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as ve:
        raise ConfigError(f"Configuración inválida en {config_path}: {ve}") from ve

    return _resolve_paths(settings, base)


def ensure_directories(settings: Settings) -> None:
    for src in settings.paths.sources:
        Path(src).mkdir(parents=True, exist_ok=True)
    Path(settings.paths.archive).mkdir(parents=True, exist_ok=True)
    Path(settings.paths.logs_root).mkdir(parents=True, exist_ok=True)
    Path(settings.paths.ledger).parent.mkdir(parents=True, exist_ok=True)
