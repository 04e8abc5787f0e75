class IngestorError(Exception):
    """Base de errores del ingestor."""


class ConfigError(IngestorError):
    """settings.yaml ausente, ilegible o con valores inválidos. Fatal al arrancar."""


class SinkError(IngestorError):
    """Fallo al persistir registros (ledger CSV o tabla)."""
