#
# src/readyrun/detection/project.py
#
"""
Recognizes SoapUI Pro (ReadyAPI) projects.
"""

from pathlib import Path
from xml.sax import SAXException

import structlog

from readyrun.detection.xml_sniffer import SniffResult, sniff_element_attribute
from readyrun.exceptions import ClassificationError

log = structlog.get_logger("detection.project")

PROJECT_ROOT_ELEMENT = "con:soapui-project"
PRO_PROJECT_ATTRIBUTE = "updated"


def is_pro_project(path: Path) -> bool:
    """
    Decides whether `path` is a SoapUI Pro project.

    Composite projects are directories and only exist in SoapUI Pro, so any
    directory qualifies. A single-file project qualifies when its root element
    carries a non-empty ``updated`` attribute, which only Pro writes.

    Raises:
        ClassificationError: the file could not be read or is not well-formed
            up to the root element.
    """
    if path.is_dir():
        log.debug("Composite project directory", path=str(path), emoji_key="classify")
        return True

    try:
        with path.open("rb") as f:
            result = sniff_element_attribute(f, PROJECT_ROOT_ELEMENT, PRO_PROJECT_ATTRIBUTE)
    except OSError as e:
        raise ClassificationError("Cannot read project file", path=str(path), details=e) from e
    except SAXException as e:
        raise ClassificationError("Project file is not valid XML", path=str(path), details=e) from e

    log.debug("Project file inspected", path=str(path), result=result.name, emoji_key="classify")
    return result is SniffResult.FOUND_WITH_VALUE

# 🔼⚙️
