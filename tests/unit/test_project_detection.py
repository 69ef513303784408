#
# tests/unit/test_project_detection.py
#
"""
Tests for recognizing SoapUI Pro projects.
"""

from pathlib import Path

import pytest

from readyrun.detection.project import is_pro_project
from readyrun.exceptions import ClassificationError


class TestIsProProject:
    def test_directory_is_always_pro(self, tmp_path: Path) -> None:
        composite = tmp_path / "composite-project"
        composite.mkdir()
        (composite / "settings.xml").write_text("this is not even xml")
        assert is_pro_project(composite) is True

    def test_empty_directory_is_pro(self, tmp_path: Path) -> None:
        composite = tmp_path / "empty-composite"
        composite.mkdir()
        assert is_pro_project(composite) is True

    def test_project_with_updated_attribute(self, project_file: Path) -> None:
        assert is_pro_project(project_file) is True

    def test_project_without_updated_attribute(self, open_source_project_file: Path) -> None:
        assert is_pro_project(open_source_project_file) is False

    def test_project_with_empty_updated_attribute(self, tmp_path: Path) -> None:
        path = tmp_path / "p.xml"
        path.write_text('<con:soapui-project xmlns:con="urn:x" updated=""/>')
        assert is_pro_project(path) is False

    def test_file_without_project_element(self, tmp_path: Path) -> None:
        path = tmp_path / "other.xml"
        path.write_text('<?xml version="1.0"?><configuration updated="yes"/>')
        assert is_pro_project(path) is False

    def test_malformed_xml_raises_classification_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.xml"
        path.write_text("<root><unclosed></root>")
        with pytest.raises(ClassificationError) as exc_info:
            is_pro_project(path)
        assert "not valid XML" in str(exc_info.value)

    def test_missing_file_raises_classification_error(self, tmp_path: Path) -> None:
        with pytest.raises(ClassificationError) as exc_info:
            is_pro_project(tmp_path / "missing.xml")
        assert "Cannot read project file" in str(exc_info.value)
