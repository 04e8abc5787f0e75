import os
import signal
import time
from pathlib import Path
from typing import Optional

import typer

from upl_ingestor.commons.config import ensure_directories, load_settings
from upl_ingestor.commons.errors import ConfigError
from upl_ingestor.commons.logger import logger, setup_logging
from upl_ingestor.helpers.router import RecordRouter
from upl_ingestor.helpers.sinks import build_sinks
from upl_ingestor.parsers.models import CSV_HEADER
from upl_ingestor.parsers.upl import parse_upl
from upl_ingestor.services.poller import Poller
from upl_ingestor.services.results_service import ResultsService

app = typer.Typer(add_completion=False, help="UPL Result Ingestor")

ConfigOption = typer.Option(None, "--config", "-c", help="ruta a settings.yaml")


def _bootstrap(config: Optional[str]):
    """Config + logging + carpetas + servicio. Error de config: sale con código 1."""
    try:
        cfg = load_settings(config)
    except ConfigError as ex:
        typer.echo(f"No se pudo leer la configuración, la aplicación se cierra: {ex}", err=True)
        raise typer.Exit(code=1)

    level = os.getenv("LOG_LEVEL", cfg.logging.level)
    setup_logging(
        cfg.paths.logs_root,
        level,
        retention_days=cfg.logging.retention_days,
        console=cfg.logging.console,
    )
    ensure_directories(cfg)

    try:
        router = RecordRouter(build_sinks(cfg))
    except Exception as ex:
        logger.error(f"No se pudieron inicializar los sinks: {ex}")
        raise typer.Exit(code=1)
    return cfg, ResultsService(cfg, router)


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def wait_for_exit(read_line=input, idle=time.sleep) -> str:
    """Bloquea hasta 'exit'/'quit' en stdin o Ctrl+C/SIGTERM.

    Si stdin se cierra (servicio con /dev/null) se sigue esperando la señal.
    Devuelve el motivo de salida.
    """
    try:
        while True:
            try:
                line = read_line()
            except EOFError:
                break
            if line.strip().lower() in ("exit", "quit"):
                return "command"
        logger.info("stdin cerrado; el ingestor sigue corriendo hasta Ctrl+C o SIGTERM")
        while True:
            idle(1)
    except KeyboardInterrupt:
        return "signal"


@app.command()
def run(config: Optional[str] = ConfigOption):
    """Polling continuo de las carpetas origen.

    Sale con 'exit'/'quit' en consola, Ctrl+C o SIGTERM. Con stdin cerrado
    (p.ej. bajo un gestor de servicios) sigue corriendo hasta la señal.
    """
    cfg, svc = _bootstrap(config)
    signal.signal(signal.SIGTERM, _raise_interrupt)
    poller = Poller(svc.run_cycle, cfg.polling.interval_seconds)
    logger.info("Ingestor iniciado. Escriba 'exit' o 'quit' para salir.")
    poller.start()

    try:
        reason = wait_for_exit()
        logger.info(f"Parada solicitada ({reason}); esperando fin del ciclo en curso...")
    finally:
        # Sin timeout: la parada sólo ocurre entre ciclos
        poller.stop()
        logger.info("Ingestor detenido.")


@app.command()
def once(config: Optional[str] = ConfigOption):
    """Una sola pasada por las carpetas origen."""
    _, svc = _bootstrap(config)
    report = svc.run_cycle()
    typer.echo(f"found={report.found} processed={report.processed} failed={len(report.failed)}")
    if report.failed:
        raise typer.Exit(code=2)


@app.command()
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="archivo .upl"),
    encoding: str = typer.Option("utf-8", help="encoding del archivo"),
):
    """Muestra los registros extraídos de un archivo sin persistir ni archivar."""
    records = parse_upl(file.name, file.read_text(encoding=encoding))
    typer.echo(CSV_HEADER)
    for rec in records:
        typer.echo(rec.to_csv_line())


if __name__ == "__main__":
    app()
