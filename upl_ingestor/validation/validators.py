# upl_ingestor/validation/validators.py
import re
from datetime import datetime

from pydantic import BaseModel, field_validator

from upl_ingestor.parsers.models import ResultRecord

UPL_TS_FORMAT = "%Y%m%d%H%M%S"
_TS_RE = re.compile(r"\d{14}")


def parse_upl_timestamp(value: str) -> datetime:
    """YYYYMMDDHHMMSS -> datetime. Vacío o mal formado lanza ValueError (no se coerciona)."""
    if value is None or not _TS_RE.fullmatch(value):
        raise ValueError(f"Timestamp inválido: {value!r} (esperado YYYYMMDDHHMMSS)")
    # strptime además rechaza fechas imposibles (mes 13, 30 de febrero...)
    return datetime.strptime(value, UPL_TS_FORMAT)


class ResultRow(BaseModel):
    """Fila lista para la tabla de resultados."""

    FILENAME: str
    REQ_NO: str
    SEND_TIME: datetime
    RESULT_TIME: datetime
    TEST_NAME: str
    TEST_RESULT: str
    CREATE_TIME: datetime

    @field_validator("SEND_TIME", "RESULT_TIME", mode="before")
    @classmethod
    def _parse_ts(cls, v):
        if isinstance(v, datetime):
            return v
        return parse_upl_timestamp(v)

    @classmethod
    def from_record(cls, rec: ResultRecord, created_at: datetime) -> "ResultRow":
        return cls(
            FILENAME=rec.source_file,
            REQ_NO=rec.request_id,
            SEND_TIME=rec.send_time,
            RESULT_TIME=rec.result_time,
            TEST_NAME=rec.test_name,
            TEST_RESULT=rec.test_result,
            CREATE_TIME=created_at,
        )
