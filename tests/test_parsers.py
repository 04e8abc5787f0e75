# flake8: noqa

from upl_ingestor.parsers.base import (
    AB_SCREENING_TEST,
    BLOODGROUP_RESULT,
    REQUEST_ID,
    extract,
    extract_groups,
)
from upl_ingestor.parsers.models import CSV_HEADER, NA, ResultRecord, Variant
from upl_ingestor.parsers.upl import classify, extract_common, normalize, parse_upl

from samples import (
    AB_NO_RESULT,
    BLOODGROUP_NO_RESULT,
    BLOODGROUP_ONLY,
    BOTH,
    GARBLED,
    HEADER_ONLY,
)


def test_extract_first_group_or_empty():
    assert extract(BOTH, REQUEST_ID) == "REQ123"
    assert extract("nada que ver", REQUEST_ID) == ""
    # Patrón sin grupo de captura -> vacío
    assert extract(BOTH, r"Result\^AB1") == ""


def test_extract_takes_first_match_in_document_order():
    text = "Result^FIRST^Ab.screening ... Result^SECOND^Ab.screening"
    assert extract(text, AB_SCREENING_TEST) == "FIRST"


def test_extract_is_idempotent():
    before = str(BOTH)
    assert extract(BOTH, REQUEST_ID) == extract(BOTH, REQUEST_ID)
    assert BOTH == before


def test_extract_groups():
    assert extract_groups("Result^MO31X^ABO/D|O^Neg^", BLOODGROUP_RESULT) == ("O", "Neg")
    assert extract_groups("sin trama", BLOODGROUP_RESULT) is None


def test_common_fields():
    common = extract_common(BOTH)
    assert common.request_id == "REQ123"
    assert common.send_time == "20240101093000"
    assert common.result_time == "20240101100000"


def test_common_fields_missing_are_empty():
    common = extract_common(GARBLED)
    assert (common.request_id, common.send_time, common.result_time) == ("", "", "")


def test_classify_both_variants():
    found = classify(BOTH)
    assert found.antibody.variant is Variant.ANTIBODY_SCREENING
    assert found.antibody.test_name == "AB1"
    assert found.antibody.test_result == "Negative"
    assert found.bloodgroup.variant is Variant.BLOOD_GROUP
    assert found.bloodgroup.test_name == "BG2"
    assert found.bloodgroup.test_result == "A|Pos"


def test_classify_none():
    found = classify(HEADER_ONLY)
    assert found.antibody is None and found.bloodgroup is None
    assert not found.matched


def test_antibody_without_result_frame():
    records = parse_upl("a.upl", AB_NO_RESULT)
    assert len(records) == 1
    r = records[0]
    assert r.to_row() == ("a.upl", "REQ123", "20240101093000", "20240101100000", "AB1", "NA")


def test_bloodgroup_composite_result():
    records = parse_upl("bg.upl", BLOODGROUP_ONLY)
    assert len(records) == 1
    assert records[0].test_name == "BG2"
    assert records[0].test_result == "A|B"
    assert records[0].request_id == "REQ777"


def test_bloodgroup_without_result_frame():
    records = parse_upl("bg.upl", BLOODGROUP_NO_RESULT)
    assert [(r.test_name, r.test_result) for r in records] == [("BG7", NA)]


def test_both_variants_antibody_first():
    records = parse_upl("both.upl", BOTH)
    assert [r.test_name for r in records] == ["AB1", "BG2"]
    # Campos comunes iguales en ambos registros
    assert records[0].to_row()[:4] == records[1].to_row()[:4]


def test_no_marker_gives_single_fallback():
    for text in (HEADER_ONLY, GARBLED, ""):
        records = parse_upl("x.upl", text)
        assert len(records) == 1
        assert (records[0].test_name, records[0].test_result) == (NA, NA)


def test_fallback_keeps_common_fields():
    r = parse_upl("qc.upl", HEADER_ONLY)[0]
    assert r.request_id == "REQ555"
    assert r.send_time == "20240303080000"
    assert r.result_time == "20240303081000"


def test_normalize_without_outcome():
    common = extract_common(BOTH)
    r = normalize("f.upl", common)
    assert r.source_file == "f.upl"
    assert (r.test_name, r.test_result) == (NA, NA)


def test_csv_line_resplits_to_fields():
    for r in parse_upl("both.upl", BOTH):
        assert tuple(r.to_csv_line().split(",")) == r.to_row()
    assert len(CSV_HEADER.split(",")) == len(r.to_row())


def test_csv_line_with_comma_is_known_limitation():
    r = ResultRecord("a,b.upl", "", "", "", NA, NA)
    assert len(r.to_csv_line().split(",")) == 7
