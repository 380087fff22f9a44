"""
Report Parser
=============
Converts a SpotBugs/FindBugs XML report into a typed BugReport.

Pipeline:
    1. Missing file → empty BugReport (the analysis step did not run)
    2. Parse XML (ElementTree)
    3. Collect direct BugInstance children of the root, in document order
    4. Collect each instance's Class / Method / SourceLine children
    5. Validate into pydantic models (all attribute coercion happens here)

Contract:
    - Absence is NOT an error.
    - A present but unparseable file is ALWAYS an error (MalformedReport).
    - Elements the renderer does not use (ShortMessage, Field, Int, ...)
      are ignored.
"""
import os
import logging
import xml.etree.ElementTree as ET
from typing import Any

from pydantic import ValidationError

from buildguard.core.errors import MalformedReport
from buildguard.models.bug_report import BugInstance, BugReport

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Element → dict extraction
# ---------------------------------------------------------------------------
# Only the XML → dict step touches raw attribute strings. pydantic does
# the type coercion, so a bad number surfaces as a ValidationError.
def _source_lines(element: ET.Element) -> list[dict[str, Any]]:
    return [
        {
            "start": line.get("start"),
            "end": line.get("end"),
            "classname": line.get("classname"),
            "sourcepath": line.get("sourcepath"),
            "sourcefile": line.get("sourcefile"),
        }
        for line in element.findall("SourceLine")
    ]


def _bug_instance_fields(bug: ET.Element) -> dict[str, Any]:
    return {
        "abbrev": bug.get("abbrev"),
        "type": bug.get("type"),
        "priority": bug.get("priority"),
        "rank": bug.get("rank"),
        "category": bug.get("category"),
        "classes": [
            {"classname": clz.get("classname"), "source_lines": _source_lines(clz)}
            for clz in bug.findall("Class")
        ],
        "methods": [
            {
                "name": md.get("name"),
                "is_static": md.get("isStatic"),
                "signature": md.get("signature"),
                "source_lines": _source_lines(md),
            }
            for md in bug.findall("Method")
        ],
        "source_lines": _source_lines(bug),
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def parse_report(path: str) -> BugReport:
    """
    Parse a static-analysis report.

    Parameters
    ----------
    path : str
        Filesystem path of the XML report.

    Returns
    -------
    BugReport
        Instances in document order. Empty if the file does not exist.

    Raises
    ------
    MalformedReport
        If the file exists but is not well-formed XML or an element does
        not match the expected schema.
    """
    path = os.fspath(path)
    logger.debug("Reviewing file %s", path)

    if not os.path.exists(path):
        logger.debug("Report %s not found, treating as no analysis run", path)
        return BugReport(source_path=path)

    logger.debug("Processing file %s", path)
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise MalformedReport(path, f"not well-formed XML ({e})") from e
    except OSError as e:
        raise MalformedReport(path, f"cannot be read ({e})") from e

    instances: list[BugInstance] = []
    for index, bug in enumerate(root.findall("BugInstance"), 1):
        try:
            instances.append(BugInstance.model_validate(_bug_instance_fields(bug)))
        except ValidationError as e:
            raise MalformedReport(
                path,
                f"BugInstance #{index} does not match the report schema: {e}",
            ) from e

    logger.info("Parsed %d BugInstance(s) from %s", len(instances), path)
    return BugReport(source_path=path, instances=instances)
