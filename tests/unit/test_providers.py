"""Unit tests for reference RI providers."""

import pandas as pd
import pytest

from rimatch import AbstractRIProvider, CSVProvider, DataFrameProvider, SchemaError


class TestDataFrameProvider:
    """Test suite for DataFrameProvider class."""

    def test_is_a_provider(self, webbook_export):
        assert isinstance(DataFrameProvider(webbook_export), AbstractRIProvider)

    def test_requires_cas_and_ri(self):
        with pytest.raises(SchemaError, match="provider records"):
            DataFrameProvider(pd.DataFrame({"CAS": ["64-17-5"]}))

    def test_has_compound(self, webbook_export):
        provider = DataFrameProvider(webbook_export)

        assert provider.has_compound("64-17-5") is True
        assert provider.has_compound(" 71-43-2 ") is True
        assert provider.has_compound("999-99-9") is False

    def test_get_ri_filters_on_query_options(self, webbook_export):
        provider = DataFrameProvider(webbook_export)

        ramp = provider.get_ri(["64-17-5", "71-43-2"], temp_prog="ramp")
        assert list(ramp["RI"]) == [1030.0]

        polar = provider.get_ri(["64-17-5"], polarity="polar", temp_prog="ramp")
        assert list(polar["RI"]) == [1450.0]

        linear = provider.get_ri(["71-43-2"], ri_type="linear", temp_prog="ramp")
        assert list(linear["RI"]) == [1049.0]

        isothermal = provider.get_ri(["71-43-2"], temp_prog="isothermal")
        assert sorted(isothermal["RI"]) == [1045.0, 1055.0]

    def test_get_ri_returns_none_when_nothing_found(self, webbook_export):
        provider = DataFrameProvider(webbook_export)

        assert provider.get_ri(["999-99-9"]) is None
        assert provider.get_ri(["67-56-1"], temp_prog="custom") is None

    def test_table_without_mode_column_answers_first_mode_only(self, sample_records):
        """Records that carry no temp_prog are served once, under the first mode."""
        provider = DataFrameProvider(sample_records)

        result = provider.get_ri(["67-56-1"], temp_prog="ramp", polarity="polar")
        assert list(result["RI"]) == [1100.0]
        assert result["temp_prog"].isna().all()

        assert provider.get_ri(["67-56-1"], temp_prog="isothermal") is None
        assert provider.get_ri(["67-56-1"], temp_prog="custom") is None

    def test_input_not_modified(self, webbook_export):
        original = webbook_export.copy()

        DataFrameProvider(webbook_export)

        pd.testing.assert_frame_equal(webbook_export, original)


class TestCSVProvider:
    """Test suite for CSVProvider class."""

    def test_initialization(self, temp_reference_csv):
        provider = CSVProvider(temp_reference_csv)

        assert provider.csv_path.exists()
        assert len(provider.records) == 8

    def test_initialization_with_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            CSVProvider(tmp_path / "does_not_exist.csv")

    def test_cas_read_as_string(self, tmp_path):
        """Leading zeros in CAS numbers survive the CSV round trip."""
        csv_path = tmp_path / "zeros.csv"
        csv_path.write_text("CAS,RI\n0050-00-0,700\n")

        provider = CSVProvider(csv_path)

        assert provider.has_compound("0050-00-0")
        assert list(provider.get_ri(["0050-00-0"])["RI"]) == [700]

    def test_get_ri(self, temp_reference_csv):
        provider = CSVProvider(temp_reference_csv)

        result = provider.get_ri(["64-17-5"], temp_prog="custom")

        assert list(result["RI"]) == [1040.0]
        assert list(result["CAS"]) == ["64-17-5"]
