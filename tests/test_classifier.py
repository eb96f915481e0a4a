"""Tests for symbol classification and tag-name sanitizing."""

import pytest

from slc_tag_importer.classifier import classify, folder_category
from slc_tag_importer.models import DataTypeKind, SymbolCategory
from slc_tag_importer.utils import clean_description, sanitize_tag_name


class TestClassify:
    @pytest.mark.parametrize("symbol, category, data_type", [
        ("S:1/5", SymbolCategory.STATUS, DataTypeKind.BOOLEAN),
        ("I:1/0", SymbolCategory.INPUT, DataTypeKind.BOOLEAN),
        ("O:2/3", SymbolCategory.OUTPUT, DataTypeKind.BOOLEAN),
        ("B3:0/1", SymbolCategory.BOOLEAN, DataTypeKind.BOOLEAN),
        ("T4:0", SymbolCategory.TIMER, DataTypeKind.INT32),
        ("C5:2", SymbolCategory.COUNTER, DataTypeKind.INT32),
        ("N7:0", SymbolCategory.INTEGER, DataTypeKind.INT16),
        ("F8:10", SymbolCategory.FLOAT, DataTypeKind.FLOAT32),
    ])
    def test_prefixes(self, symbol, category, data_type):
        assert classify(symbol) == (category, data_type)

    def test_empty(self):
        assert classify("") == (SymbolCategory.UNCLASSIFIED, DataTypeKind.BOOLEAN)

    def test_none(self):
        assert classify(None) == (SymbolCategory.UNCLASSIFIED, DataTypeKind.BOOLEAN)

    def test_unknown(self):
        assert classify("R6:0") == (SymbolCategory.UNCLASSIFIED, DataTypeKind.BOOLEAN)

    def test_case_sensitive(self):
        assert classify("n7:0")[0] == SymbolCategory.UNCLASSIFIED

    def test_leading_whitespace_trimmed(self):
        assert classify("  N7:0") == (SymbolCategory.INTEGER, DataTypeKind.INT16)

    def test_deterministic(self):
        assert classify("T4:0.ACC") == classify("T4:0.ACC")

    def test_str_enum_values(self):
        category, data_type = classify("F8:0")
        assert category == "Float"
        assert data_type == "Float32"


class TestFolderCategory:
    def test_io_chain(self):
        assert folder_category("I:1/0") == SymbolCategory.INPUT
        assert folder_category("O:0/0") == SymbolCategory.OUTPUT
        assert folder_category("S:2") == SymbolCategory.STATUS

    def test_data_file_chain(self):
        assert folder_category("B3:1/4") == SymbolCategory.BOOLEAN
        assert folder_category("N7:0") == SymbolCategory.INTEGER

    def test_unmatched(self):
        assert folder_category("ST9:0") == SymbolCategory.STATUS
        assert folder_category("L10:0") == SymbolCategory.UNCLASSIFIED
        assert folder_category("") == SymbolCategory.UNCLASSIFIED

    def test_matches_type_category_for_known_prefixes(self):
        for symbol in ("S:1", "I:1", "O:1", "B3:0", "T4:0", "C5:0", "N7:0", "F8:0"):
            assert folder_category(symbol) == classify(symbol)[0]


class TestSanitizeTagName:
    def test_colon(self): assert sanitize_tag_name("N7:0") == "N7_0"
    def test_slash(self): assert sanitize_tag_name("B3:0/1") == "B3_0_1"
    def test_quote(self): assert sanitize_tag_name('"MOTOR"') == "_MOTOR_"
    def test_space(self): assert sanitize_tag_name("A B") == "A_B"
    def test_dot_kept(self): assert sanitize_tag_name("T4:0.ACC") == "T4_0.ACC"
    def test_empty(self): assert sanitize_tag_name("") == ""

    @pytest.mark.parametrize("symbol", [
        'I:1.0/15', 'B3:0/1', '"N7:0 spare"', 'a:b/c d"e', ' : / " ',
    ])
    def test_no_forbidden_characters(self, symbol):
        name = sanitize_tag_name(symbol)
        for ch in (':', '/', '"', ' '):
            assert ch not in name


class TestCleanDescription:
    def test_quotes_and_trim(self):
        assert clean_description('"Speed setpoint"') == "Speed setpoint"

    def test_inner_quotes(self):
        assert clean_description('Say "hi"') == "Say  hi"

    def test_empty(self):
        assert clean_description("") == ""

    def test_control_characters(self):
        assert clean_description("Bell\x07 char\x00") == "Bell char"

    def test_cdata_delimiter_kept(self):
        assert clean_description('"a]]>b"') == "a]]>b"
