from typing import Dict, List, Sequence

from upl_ingestor.commons.logger import logger
from upl_ingestor.parsers.models import ResultRecord


class RecordRouter:
    """Reparte los registros de un archivo a cada sink habilitado (csv, database)."""

    def __init__(self, sinks: Sequence):
        self.sinks = list(sinks)

    def dispatch(self, records: List[ResultRecord]) -> Dict[str, int]:
        summary: Dict[str, int] = {}
        for sink in self.sinks:
            try:
                summary[sink.name] = sink.write(records)
            except Exception as ex:
                # Un sink caído no detiene los demás ni el archivo
                logger.error(f"Sink '{sink.name}' falló con {len(records)} registro(s): {ex}")
                summary[sink.name] = 0
                continue
            if summary[sink.name] < len(records):
                logger.warning(
                    f"Sink '{sink.name}' escribió {summary[sink.name]}/{len(records)} registro(s)"
                )
        return summary
