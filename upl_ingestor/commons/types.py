from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PathsCfg(BaseModel):
    sources: List[str]
    archive: str
    logs_root: str
    ledger: str

    @field_validator("sources", mode="before")
    @classmethod
    def _as_list(cls, v):
        # Permite "sources: ./SOURCE_DIR" además de una lista
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("sources")
    @classmethod
    def _not_empty(cls, v: List[str]):
        if not v:
            raise ValueError("paths.sources necesita al menos una carpeta")
        return v


class PollingCfg(BaseModel):
    interval_seconds: float = Field(default=60, gt=0)
    filename_glob: str = "*.upl"
    encoding: str = "utf-8"


class ArchiveCfg(BaseModel):
    partition_by_date: bool = True


class SinksCfg(BaseModel):
    enabled: List[Literal["csv", "database"]] = ["csv"]
    csv_encoding: str = "utf-8"


class DatabaseCfg(BaseModel):
    url: str
    table: str = "BLD_RESULT"
    create_table: bool = True


class LoggingCfg(BaseModel):
    level: str = "INFO"
    retention_days: int = Field(default=14, gt=0)
    console: bool = True


class Settings(BaseModel):
    paths: PathsCfg
    polling: PollingCfg = PollingCfg()
    archive: ArchiveCfg = ArchiveCfg()
    sinks: SinksCfg = SinksCfg()
    database: Optional[DatabaseCfg] = None
    logging: LoggingCfg = LoggingCfg()

    @model_validator(mode="after")
    def _database_when_enabled(self):
        if "database" in self.sinks.enabled and self.database is None:
            raise ValueError("sinks.enabled incluye 'database' pero falta la sección database")
        return self
