import threading
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from pydantic import ValidationError
from sqlalchemy import Column, DateTime, MetaData, String, Table, create_engine
from sqlalchemy.exc import SQLAlchemyError

from upl_ingestor.commons.errors import SinkError
from upl_ingestor.commons.logger import logger
from upl_ingestor.parsers.models import CSV_HEADER, ResultRecord
from upl_ingestor.validation.validators import ResultRow


class CsvLedgerSink:
    """Ledger CSV append-only. Cabecera al crear el archivo, una línea por registro."""

    name = "csv"

    def __init__(self, path: str, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self._lock = threading.Lock()

    def _ensure_header(self):
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(CSV_HEADER + "\n", encoding=self.encoding)

    def write(self, records: Iterable[ResultRecord]) -> int:
        n = 0
        with self._lock:
            try:
                self._ensure_header()
                with open(self.path, "a", encoding=self.encoding) as f:
                    for rec in records:
                        f.write(rec.to_csv_line() + "\n")
                        n += 1
            except OSError as ex:
                raise SinkError(f"No se pudo escribir en {self.path}: {ex}") from ex
        return n


def build_results_table(metadata: MetaData, name: str = "BLD_RESULT") -> Table:
    return Table(
        name,
        metadata,
        Column("FILENAME", String(255), nullable=False),
        Column("REQ_NO", String(64)),
        Column("SEND_TIME", DateTime, nullable=False),
        Column("RESULT_TIME", DateTime, nullable=False),
        Column("TEST_NAME", String(64)),
        Column("TEST_RESULT", String(128)),
        Column("CREATE_TIME", DateTime, nullable=False),
    )


class DatabaseSink:
    """Inserta cada registro en la tabla de resultados, una transacción por fila.

    Una fila con timestamps inválidos o que falle al insertar se registra en el
    log y se salta; las demás filas del archivo se insertan igual.
    """

    name = "database"

    def __init__(self, url: str, table: str = "BLD_RESULT", create_table: bool = True, engine=None):
        self.engine = engine if engine is not None else create_engine(url, future=True)
        self.metadata = MetaData()
        self.table = build_results_table(self.metadata, table)
        if create_table:
            try:
                self.metadata.create_all(self.engine)
            except SQLAlchemyError as ex:
                raise SinkError(f"No se pudo crear la tabla {table}: {ex}") from ex

    def write(self, records: Iterable[ResultRecord]) -> int:
        inserted = 0
        for rec in records:
            try:
                row = ResultRow.from_record(rec, created_at=datetime.now())
            except ValidationError as ve:
                logger.error(f"[{rec.source_file}] {rec.test_name}: fila descartada, timestamp inválido: {ve}")
                continue
            try:
                with self.engine.begin() as conn:
                    conn.execute(self.table.insert().values(**row.model_dump()))
                inserted += 1
            except SQLAlchemyError as ex:
                logger.error(f"[{rec.source_file}] {rec.test_name}: insert falló: {ex}")
        return inserted

    def dispose(self):
        self.engine.dispose()


def build_sinks(settings) -> List:
    sinks = []
    for kind in settings.sinks.enabled:
        if kind == "csv":
            sinks.append(CsvLedgerSink(settings.paths.ledger, settings.sinks.csv_encoding))
        elif kind == "database":
            db = settings.database
            sinks.append(DatabaseSink(db.url, db.table, db.create_table))
    return sinks
