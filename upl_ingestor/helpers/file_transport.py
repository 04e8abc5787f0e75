import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional


class FileCollector:
    """Lista archivos candidatos (*.upl) en cada carpeta origen, en orden."""

    def __init__(self, sources: Iterable[str], glob: str = "*.upl"):
        self.sources = [Path(s) for s in sources]
        self.glob = glob

    def collect(self) -> List[Path]:
        files: List[Path] = []
        for src in self.sources:
            if not src.is_dir():
                continue
            files.extend(sorted(p for p in src.glob(self.glob) if p.is_file()))
        return files


def read_upl(path: Path, encoding: str = "utf-8") -> str:
    return Path(path).read_text(encoding=encoding)


class FileArchiver:
    def __init__(self, root: str, partition_by_date: bool = True):
        self.root = Path(root)
        self.partition_by_date = partition_by_date

    def destination_dir(self, when: Optional[datetime] = None) -> Path:
        if not self.partition_by_date:
            return self.root
        return self.root / (when or datetime.now()).strftime("%Y-%m-%d")

    def archive(self, src: Path, when: Optional[datetime] = None) -> Path:
        when = when or datetime.now()
        dst_dir = self.destination_dir(when)
        dst_dir.mkdir(parents=True, exist_ok=True)
        dst = dst_dir / src.name
        if dst.exists():
            # Mismo nombre reenviado por el equipo: no pisar el archivado previo
            dst = dst_dir / f"{src.stem}_{when.strftime('%H%M%S%f')}{src.suffix}"
        shutil.move(str(src), str(dst))
        return dst
