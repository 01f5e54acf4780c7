"""
Unit tests for the step validators and the mapping form
"""

import pytest

from clustering_map import messages
from clustering_map.config import MAX_UPLOAD_BYTES, XLS_CONTENT_TYPE, XLSX_CONTENT_TYPE
from clustering_map.errors import InputValidationError
from clustering_map.models import ColumnMapping, SpreadsheetFile
from clustering_map.workflow import MappingForm, validate_column_mapping, validate_upload_file

from conftest import SizedFile


class TestUploadValidator:
    """Test cases for validate_upload_file"""

    @pytest.mark.parametrize("content_type", [XLSX_CONTENT_TYPE, XLS_CONTENT_TYPE])
    def test_accepts_spreadsheet_types(self, content_type):
        validate_upload_file(SpreadsheetFile(filename="a.xlsx", content_type=content_type, content=b"x"))

    def test_accepts_content_type_with_parameters(self):
        validate_upload_file(
            SpreadsheetFile(filename="a.xlsx", content_type=XLSX_CONTENT_TYPE + "; charset=binary", content=b"x")
        )

    @pytest.mark.parametrize("content_type", ["text/csv", "application/pdf", "", "application/octet-stream"])
    def test_rejects_other_types(self, content_type):
        with pytest.raises(InputValidationError) as exc:
            validate_upload_file(SpreadsheetFile(filename="a.csv", content_type=content_type, content=b"x"))
        assert exc.value.message == messages.INVALID_FILE_TYPE

    def test_accepts_exactly_max_size(self):
        f = SizedFile(filename="a.xlsx", content_type=XLSX_CONTENT_TYPE, content=b"", reported_size=MAX_UPLOAD_BYTES)
        validate_upload_file(f)

    def test_rejects_oversized_file(self):
        f = SizedFile(
            filename="a.xlsx", content_type=XLSX_CONTENT_TYPE, content=b"", reported_size=MAX_UPLOAD_BYTES + 1
        )
        with pytest.raises(InputValidationError) as exc:
            validate_upload_file(f)
        assert exc.value.message == messages.FILE_TOO_LARGE

    def test_from_path_infers_excel_type(self, tmp_path):
        path = tmp_path / "survey.XLSX"
        path.write_bytes(b"PK")
        f = SpreadsheetFile.from_path(path)
        assert f.content_type == XLSX_CONTENT_TYPE
        assert f.filename == "survey.XLSX"
        assert f.size == 2


class TestColumnMappingValidator:
    """Test cases for validate_column_mapping and ColumnMapping.for_upload"""

    def test_valid_mapping(self, upload_result):
        mapping = ColumnMapping.for_upload(upload_result, "自由記述", id_column="ID", group_column="グループ")
        assert mapping.text_column == "自由記述"

    def test_unknown_text_column(self, upload_result):
        with pytest.raises(InputValidationError) as exc:
            ColumnMapping.for_upload(upload_result, "コメント")
        assert "コメント" in exc.value.message

    def test_unknown_optional_column(self, upload_result):
        with pytest.raises(InputValidationError):
            ColumnMapping.for_upload(upload_result, "自由記述", group_column="部署")

    def test_empty_text_column(self, upload_result):
        with pytest.raises(InputValidationError) as exc:
            validate_column_mapping(ColumnMapping(text_column=""), upload_result.columns)
        assert exc.value.message == messages.TEXT_COLUMN_REQUIRED

    def test_blank_optional_roles_become_none(self):
        mapping = ColumnMapping(text_column="自由記述", id_column="", group_column="  ")
        assert mapping.id_column is None
        assert mapping.group_column is None


class TestMappingForm:
    """Test cases for MappingForm completion gating"""

    def test_incomplete_until_text_column_selected(self, upload_result):
        form = MappingForm(upload_result)
        assert not form.can_complete

        form.select("id_column", "ID")
        form.select("group_column", "グループ")
        assert not form.can_complete

        form.select("text_column", "自由記述")
        assert form.can_complete

    @pytest.mark.parametrize("column", ["ID", "回答者", "自由記述", "グループ"])
    def test_any_uploaded_column_enables_completion(self, upload_result, column):
        form = MappingForm(upload_result)
        form.select("text_column", column)
        assert form.can_complete
        assert form.build().text_column == column

    def test_rejects_column_outside_upload(self, upload_result):
        form = MappingForm(upload_result)
        with pytest.raises(InputValidationError):
            form.select("text_column", "存在しない列")
        assert form.selected("text_column") is None
        assert not form.can_complete

    def test_clearing_text_column_disables_completion(self, upload_result):
        form = MappingForm(upload_result)
        form.select("text_column", "自由記述")
        form.select("text_column", None)
        assert not form.can_complete
        with pytest.raises(InputValidationError):
            form.build()

    def test_unknown_role(self, upload_result):
        with pytest.raises(KeyError):
            MappingForm(upload_result).select("date_column", "ID")

    def test_prefilled_from_previous_mapping(self, upload_result):
        previous = ColumnMapping(text_column="自由記述", group_column="グループ")
        form = MappingForm(upload_result, previous)
        assert form.can_complete
        assert form.build() == previous
