# ===============================
# File: upl_ingestor/parsers/models.py
# ===============================
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

CSV_HEADER = "FILENAME,REQ_NO,SEND_TIME,RESULT_TIME,TEST_NAME,TEST_RESULT"
NA = "NA"


class Variant(str, Enum):
    ANTIBODY_SCREENING = "AntibodyScreening"
    BLOOD_GROUP = "BloodGroup"


@dataclass(frozen=True)
class VariantOutcome:
    variant: Variant
    test_name: str
    test_result: str  # "NA" when the result frame is missing


@dataclass(frozen=True)
class Classification:
    antibody: Optional[VariantOutcome] = None
    bloodgroup: Optional[VariantOutcome] = None

    @property
    def matched(self) -> bool:
        return self.antibody is not None or self.bloodgroup is not None


@dataclass(frozen=True)
class CommonFields:
    request_id: str = ""
    send_time: str = ""  # YYYYMMDDHHMMSS
    result_time: str = ""  # YYYYMMDDHHMMSS


@dataclass(frozen=True)
class ResultRecord:
    source_file: str
    request_id: str
    send_time: str
    result_time: str
    test_name: str
    test_result: str

    def to_row(self) -> Tuple[str, ...]:
        return (
            self.source_file,
            self.request_id,
            self.send_time,
            self.result_time,
            self.test_name,
            self.test_result,
        )

    def to_csv_line(self) -> str:
        """Comma-joined ledger line, no quoting (a ',' inside a field breaks the columns)."""
        return ",".join(self.to_row())
