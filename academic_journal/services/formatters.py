"""Report formatters and the registry that looks them up by name."""

import xml.etree.ElementTree as ET
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any, Protocol

from academic_journal.core.exceptions import (
    ArgumentNullError,
    DuplicatedFormatterError,
    FormatterNotFoundError,
    RegistrationNotSupportedError,
)
from academic_journal.schemas.report import ReportData


class ReportFormatter(Protocol):
    def format_report(self, report: ReportData) -> str: ...


class JsonReportFormatter:
    """Indented JSON with PascalCase keys; None fields are omitted."""

    def format_report(self, report: ReportData) -> str:
        return report.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def parse_report(self, text: str) -> ReportData:
        return ReportData.model_validate_json(text)


class XmlReportFormatter:
    """XML rooted at <Report>; None fields are omitted.

    Layout::

        <Report>
          <Header><Lecture/><Student/><Course/></Header>
          <Records><Record>...</Record></Records>
          <AverageScore/>
          <AttendancePercentage/>
        </Report>
    """

    ROOT = "Report"
    RECORD = "Record"

    def format_report(self, report: ReportData) -> str:
        data = report.model_dump(by_alias=True, exclude_none=True)

        root = ET.Element(self.ROOT)
        header = ET.SubElement(root, "Header")
        self._append_fields(header, data["Header"])
        records = ET.SubElement(root, "Records")
        for record in data["Records"]:
            self._append_fields(ET.SubElement(records, self.RECORD), record)
        for name in ("AverageScore", "AttendancePercentage"):
            if name in data:
                ET.SubElement(root, name).text = self._to_text(data[name])

        ET.indent(root)
        # Parsers normalize a literal carriage return to a newline
        return ET.tostring(root, encoding="unicode").replace("\r", "&#13;")

    def parse_report(self, text: str) -> ReportData:
        root = ET.fromstring(text)
        if root.tag != self.ROOT:
            raise ValueError(f"Expected <{self.ROOT}> root element, got <{root.tag}>")

        data: dict[str, Any] = {}
        for child in root:
            if child.tag == "Header":
                data["Header"] = self._read_fields(child)
            elif child.tag == "Records":
                data["Records"] = [self._read_fields(record) for record in child.iter(self.RECORD)]
            else:
                data[child.tag] = child.text
        # Values arrive as text; validation coerces them back to bool, int and float
        return ReportData.model_validate(data)

    def _append_fields(self, parent: ET.Element, fields: Mapping[str, Any]) -> None:
        for name, value in fields.items():
            ET.SubElement(parent, name).text = self._to_text(value)

    @staticmethod
    def _read_fields(element: ET.Element) -> dict[str, str]:
        return {child.tag: child.text or "" for child in element}

    @staticmethod
    def _to_text(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)


class FormatterRegistry:
    """Name-keyed collection of report formatters.

    Registration is insert-only. A mutable mapping passed in is used as
    the storage itself, so registrations show up in it. A sealed registry,
    or one built over a read-only mapping, rejects registration altogether.
    """

    def __init__(
        self,
        formatters: Mapping[str, ReportFormatter] | None = None,
        *,
        sealed: bool = False,
    ):
        if formatters is None:
            formatters = {}
        self._sealed = sealed or not isinstance(formatters, MutableMapping)
        self._formatters = formatters

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, name: str, formatter: ReportFormatter) -> None:
        if name is None:
            raise ArgumentNullError("name")
        if formatter is None:
            raise ArgumentNullError("formatter")
        if self._sealed:
            raise RegistrationNotSupportedError()
        if name in self._formatters:
            raise DuplicatedFormatterError(name)
        self._formatters[name] = formatter

    def get(self, name: str) -> ReportFormatter:
        try:
            return self._formatters[name]
        except KeyError:
            raise FormatterNotFoundError(name) from None

    def names(self) -> list[str]:
        return list(self._formatters)

    def __contains__(self, name: object) -> bool:
        return name in self._formatters

    def __iter__(self) -> Iterator[str]:
        return iter(self._formatters)


def create_default_registry() -> FormatterRegistry:
    """Registry with the built-in "json" and "xml" formatters."""
    registry = FormatterRegistry()
    registry.register("json", JsonReportFormatter())
    registry.register("xml", XmlReportFormatter())
    return registry
