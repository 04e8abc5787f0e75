# upl_ingestor/services/results_service.py
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from upl_ingestor.commons.logger import logger
from upl_ingestor.commons.types import Settings
from upl_ingestor.helpers.file_transport import FileArchiver, FileCollector, read_upl
from upl_ingestor.helpers.router import RecordRouter
from upl_ingestor.parsers.models import ResultRecord
from upl_ingestor.parsers.upl import parse_upl


@dataclass
class CycleReport:
    found: int = 0
    processed: int = 0
    failed: List[str] = field(default_factory=list)


class ResultsService:
    def __init__(
        self,
        settings: Settings,
        router: RecordRouter,
        collector: Optional[FileCollector] = None,
        archiver: Optional[FileArchiver] = None,
    ):
        self.settings = settings
        self.router = router
        self.collector = collector or FileCollector(
            settings.paths.sources, settings.polling.filename_glob
        )
        self.archiver = archiver or FileArchiver(
            settings.paths.archive, settings.archive.partition_by_date
        )

    def process_file(self, path: Path) -> Optional[List[ResultRecord]]:
        """Lee, parsea, persiste y archiva un archivo.

        Si falla la lectura o el parseo el archivo queda en la carpeta origen
        para el siguiente ciclo y se devuelve None. Un fallo de persistencia no
        impide archivar.
        """
        path = Path(path)
        started = time.perf_counter()
        logger.info(f"Procesando archivo: {path.name}")

        try:
            text = read_upl(path, self.settings.polling.encoding)
            records = parse_upl(path.name, text)
        except Exception as ex:
            logger.exception(f"Error procesando {path.name}: {ex}. Queda en {path.parent}")
            return None

        summary = self.router.dispatch(records)

        try:
            dst = self.archiver.archive(path)
        except OSError as ex:
            # Los registros ya se escribieron; el archivo se reintenta en el próximo ciclo
            logger.error(f"No se pudo archivar {path.name}: {ex}")
        else:
            logger.debug(f"{path.name} archivado en {dst}")

        elapsed = time.perf_counter() - started
        logger.info(
            f"Archivo {path.name} completado: {len(records)} registro(s) {summary}, "
            f"{elapsed:.2f}s"
        )
        return records

    def run_cycle(self) -> CycleReport:
        report = CycleReport()
        logger.info("Iniciando ciclo de lectura...")
        files = self.collector.collect()
        report.found = len(files)
        logger.info(f"Encontrado(s) {report.found} archivo(s)")

        for f in files:
            # Un archivo malo no detiene el resto del ciclo
            if self.process_file(f) is None:
                report.failed.append(f.name)
            else:
                report.processed += 1

        logger.info(
            f"Ciclo completado: {report.processed} ok, {len(report.failed)} con error; "
            f"próximo en {self.settings.polling.interval_seconds}s"
        )
        return report
