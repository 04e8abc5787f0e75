from typing import List, Optional

from .base import (
    AB_SCREENING_RESULT,
    AB_SCREENING_TEST,
    BLOODGROUP_RESULT,
    BLOODGROUP_TEST,
    REQUEST_ID,
    RESULT_TIME,
    SEND_TIME,
    extract,
    extract_groups,
)
from .models import NA, Classification, CommonFields, ResultRecord, Variant, VariantOutcome


def _classify_antibody(text: str) -> Optional[VariantOutcome]:
    test_name = extract(text, AB_SCREENING_TEST)
    if not test_name:
        return None
    # El nombre del test basta para emitir registro; sin trama CN15B queda NA
    result = extract(text, AB_SCREENING_RESULT)
    return VariantOutcome(Variant.ANTIBODY_SCREENING, test_name, result or NA)


def _classify_bloodgroup(text: str) -> Optional[VariantOutcome]:
    test_name = extract(text, BLOODGROUP_TEST)
    if not test_name:
        return None
    groups = extract_groups(text, BLOODGROUP_RESULT)
    result = "|".join(groups[:2]) if groups and len(groups) >= 2 else NA
    return VariantOutcome(Variant.BLOOD_GROUP, test_name, result)


def classify(text: str) -> Classification:
    """Detect which result shapes the message carries.

    Both variants are checked independently, so one file may yield both.
    """
    return Classification(
        antibody=_classify_antibody(text),
        bloodgroup=_classify_bloodgroup(text),
    )


def extract_common(text: str) -> CommonFields:
    return CommonFields(
        request_id=extract(text, REQUEST_ID),
        send_time=extract(text, SEND_TIME),
        result_time=extract(text, RESULT_TIME),
    )


def normalize(
    file_name: str, common: CommonFields, outcome: Optional[VariantOutcome] = None
) -> ResultRecord:
    """Flatten header fields plus one variant outcome; no outcome gives the NA/NA row."""
    return ResultRecord(
        source_file=file_name,
        request_id=common.request_id,
        send_time=common.send_time,
        result_time=common.result_time,
        test_name=outcome.test_name if outcome else NA,
        test_result=outcome.test_result if outcome else NA,
    )


def parse_upl(file_name: str, text: str) -> List[ResultRecord]:
    common = extract_common(text)
    found = classify(text)

    records: List[ResultRecord] = []
    for outcome in (found.antibody, found.bloodgroup):
        if outcome is not None:
            records.append(normalize(file_name, common, outcome))

    if not records:
        records.append(normalize(file_name, common))
    return records
