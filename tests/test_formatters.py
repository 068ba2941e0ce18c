import json
import xml.etree.ElementTree as ET
from types import MappingProxyType

import pytest
from pydantic import ValidationError

from academic_journal.core.exceptions import (
    ArgumentNullError,
    DuplicatedFormatterError,
    FormatterNotFoundError,
    RegistrationNotSupportedError,
)
from academic_journal.schemas.report import ReportData, ReportHeader, ReportRecord
from academic_journal.services.formatters import (
    FormatterRegistry,
    JsonReportFormatter,
    XmlReportFormatter,
    create_default_registry,
)


def lecture_report() -> ReportData:
    return ReportData(
        header=ReportHeader(lecture="Physics L1", course="Physics"),
        records=[
            ReportRecord(student="A", attendance=False, score=0),
            ReportRecord(student="B", attendance=True, score=4),
            ReportRecord(student="C", attendance=True, score=5),
        ],
        attendance_percentage=200 / 3,
    )


def student_report() -> ReportData:
    return ReportData(
        header=ReportHeader(student="A", course="Physics"),
        records=[
            ReportRecord(lecture="Physics L1", attendance=True, score=3),
            ReportRecord(lecture="Physics L2", attendance=True, score=4),
        ],
        average_score=3.5,
        attendance_percentage=100.0,
    )


def empty_report() -> ReportData:
    return ReportData(header=ReportHeader(lecture="Physics L9", course="Physics"))


def multiline_report() -> ReportData:
    return ReportData(
        header=ReportHeader(lecture="Physics\r\nL1", course="Physics & <Optics>"),
        records=[ReportRecord(student="A\rB", attendance=True, score=5)],
        attendance_percentage=100.0,
    )


class DummyFormatter:
    def format_report(self, report: ReportData) -> str:
        return "dummy"


# ==========================================
# Registry
# ==========================================

def test_default_registry_has_json_and_xml() -> None:
    registry = create_default_registry()

    assert registry.names() == ["json", "xml"]
    assert isinstance(registry.get("json"), JsonReportFormatter)
    assert isinstance(registry.get("xml"), XmlReportFormatter)


def test_register_and_get() -> None:
    registry = FormatterRegistry()
    formatter = DummyFormatter()

    registry.register("dummy", formatter)

    assert registry.get("dummy") is formatter
    assert "dummy" in registry


def test_register_duplicate_name_keeps_first_formatter() -> None:
    registry = FormatterRegistry()
    first, second = DummyFormatter(), DummyFormatter()
    registry.register("dummy", first)

    with pytest.raises(DuplicatedFormatterError):
        registry.register("dummy", second)
    assert registry.get("dummy") is first


@pytest.mark.parametrize(
    "name, formatter, argument",
    [(None, DummyFormatter(), "name"), ("dummy", None, "formatter")],
)
def test_register_none_argument_raises(name, formatter, argument) -> None:
    registry = FormatterRegistry()

    with pytest.raises(ArgumentNullError) as exc_info:
        registry.register(name, formatter)
    assert exc_info.value.argument == argument


def test_sealed_registry_rejects_registration() -> None:
    registry = FormatterRegistry({"json": JsonReportFormatter()}, sealed=True)

    with pytest.raises(RegistrationNotSupportedError):
        registry.register("dummy", DummyFormatter())
    assert registry.names() == ["json"]


def test_read_only_storage_seals_registry() -> None:
    registry = FormatterRegistry(MappingProxyType({"xml": XmlReportFormatter()}))

    assert registry.sealed
    with pytest.raises(RegistrationNotSupportedError):
        registry.register("dummy", DummyFormatter())
    assert isinstance(registry.get("xml"), XmlReportFormatter)


def test_registry_uses_given_mapping_as_storage() -> None:
    storage = {"json": JsonReportFormatter()}
    registry = FormatterRegistry(storage)
    formatter = DummyFormatter()

    registry.register("dummy", formatter)
    storage["xml"] = XmlReportFormatter()

    assert storage["dummy"] is formatter
    assert isinstance(registry.get("xml"), XmlReportFormatter)
    assert registry.names() == ["json", "dummy", "xml"]


def test_get_unknown_formatter_raises() -> None:
    with pytest.raises(FormatterNotFoundError):
        create_default_registry().get("csv")


# ==========================================
# JSON
# ==========================================

@pytest.mark.parametrize(
    "report", [lecture_report(), student_report(), empty_report(), multiline_report()]
)
def test_json_round_trip(report: ReportData) -> None:
    formatter = JsonReportFormatter()

    assert formatter.parse_report(formatter.format_report(report)) == report


def test_json_omits_null_fields_and_indents() -> None:
    text = JsonReportFormatter().format_report(lecture_report())
    data = json.loads(text)

    assert "\n  \"Header\"" in text
    assert data["Header"] == {"Lecture": "Physics L1", "Course": "Physics"}
    assert data["Records"][0] == {"Student": "A", "Attendance": False, "Score": 0}
    assert "AverageScore" not in data
    assert data["AttendancePercentage"] == pytest.approx(200 / 3)


# ==========================================
# XML
# ==========================================

@pytest.mark.parametrize(
    "report", [lecture_report(), student_report(), empty_report(), multiline_report()]
)
def test_xml_round_trip(report: ReportData) -> None:
    formatter = XmlReportFormatter()

    assert formatter.parse_report(formatter.format_report(report)) == report


def test_xml_structure() -> None:
    root = ET.fromstring(XmlReportFormatter().format_report(student_report()))

    assert root.tag == "Report"
    assert [child.tag for child in root] == ["Header", "Records", "AverageScore", "AttendancePercentage"]
    assert [child.tag for child in root.find("Header")] == ["Student", "Course"]
    records = root.find("Records")
    assert [record.tag for record in records] == ["Record", "Record"]
    assert [child.tag for child in records[0]] == ["Lecture", "Attendance", "Score"]
    assert records[0].find("Attendance").text == "true"
    assert root.find("AverageScore").text == "3.5"


def test_xml_header_keeps_declaration_order() -> None:
    root = ET.fromstring(XmlReportFormatter().format_report(lecture_report()))

    assert [child.tag for child in root.find("Header")] == ["Lecture", "Course"]
    assert root.find("AverageScore") is None


def test_xml_rejects_foreign_root() -> None:
    with pytest.raises(ValueError):
        XmlReportFormatter().parse_report("<Invoice />")


def test_xml_escapes_carriage_return() -> None:
    text = XmlReportFormatter().format_report(multiline_report())

    assert "\r" not in text
    assert "<Lecture>Physics&#13;\nL1</Lecture>" in text


@pytest.mark.parametrize("value", ["L\x01", "L\x00", "L\ufffe"])
def test_report_text_rejects_characters_xml_cannot_carry(value: str) -> None:
    with pytest.raises(ValidationError):
        ReportHeader(lecture=value, course="Physics")
    with pytest.raises(ValidationError):
        ReportRecord(student=value, attendance=True, score=1)
