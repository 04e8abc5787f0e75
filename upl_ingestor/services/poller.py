import threading
from typing import Callable, Optional

from upl_ingestor.commons.logger import logger


class Poller:
    """Ejecuta un ciclo cada `interval_seconds`, nunca dos a la vez.

    `tick()` puede llamarse desde cualquier hilo; si ya hay un ciclo en curso
    la llamada se descarta. La parada sólo se aplica entre ciclos.
    """

    def __init__(self, cycle: Callable[[], object], interval_seconds: float):
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self._in_flight = threading.Lock()
        self._stop = threading.Event()
        self._worker: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def tick(self) -> bool:
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Ciclo anterior aún en curso; se omite este tick")
            return False
        try:
            self.cycle()
        except Exception as ex:
            logger.exception(f"Error en ciclo de lectura: {ex}")
        finally:
            self._in_flight.release()
        return True

    def run_forever(self):
        logger.info(f"Polling cada {self.interval_seconds}s")
        while not self._stop.is_set():
            self.tick()
            if self._stop.wait(self.interval_seconds):
                break
        logger.info("Polling detenido")

    def start(self) -> threading.Thread:
        self._stop.clear()
        # No daemon: el proceso no puede salir con un archivo a medio procesar
        self._worker = threading.Thread(target=self.run_forever, name="upl-poller")
        self._worker.start()
        return self._worker

    def stop(self, timeout: Optional[float] = None):
        """Pide la parada y espera a que termine el ciclo en curso (sin límite por defecto)."""
        self._stop.set()
        if self._worker is not None:
            self._worker.join(timeout)
