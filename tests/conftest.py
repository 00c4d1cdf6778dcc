"""Pytest configuration and shared fixtures."""

import pandas as pd
import pytest


@pytest.fixture
def sample_measured():
    """Measured GC data: one good match, one poor match, one boundary, one unmatched."""
    return pd.DataFrame(
        [
            {"CAS": "64-17-5", "RI": 1000.0, "Name": "Ethanol", "File": "run_01", "Area": 1.5e6},
            {"CAS": "67-56-1", "RI": 1000.0, "Name": "Methanol", "File": "run_01", "Area": 2.1e5},
            {"CAS": "71-43-2", "RI": 1000.0, "Name": "Benzene", "File": "run_02", "Area": 8.4e5},
            {"CAS": "999-99-9", "RI": 1500.0, "Name": "Unknown", "File": "run_02", "Area": 1.2e4},
        ]
    )


@pytest.fixture
def sample_records():
    """Raw reference records: ethanol mean 1040, methanol mean 1100, benzene mean 1050."""
    return pd.DataFrame(
        [
            {"CAS": "64-17-5", "RI": 1030.0},
            {"CAS": "64-17-5", "RI": 1040.0},
            {"CAS": "64-17-5", "RI": 1050.0},
            {"CAS": "67-56-1", "RI": 1100.0},
            {"CAS": "71-43-2", "RI": 1045.0},
            {"CAS": "71-43-2", "RI": 1055.0},
        ]
    )


@pytest.fixture
def webbook_export():
    """Records shaped like a WebBook export, tagged per temperature program."""
    return pd.DataFrame(
        [
            {"CAS": "64-17-5", "RI": 1030.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "ramp"},
            {"CAS": "64-17-5", "RI": 1050.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "isothermal"},
            {"CAS": "64-17-5", "RI": 1040.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "custom"},
            {"CAS": "64-17-5", "RI": 1450.0, "type": "kovats", "polarity": "polar", "temp_prog": "ramp"},
            {"CAS": "67-56-1", "RI": 1100.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "ramp"},
            {"CAS": "71-43-2", "RI": 1045.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "isothermal"},
            {"CAS": "71-43-2", "RI": 1055.0, "type": "kovats", "polarity": "non-polar", "temp_prog": "isothermal"},
            {"CAS": "71-43-2", "RI": 1049.0, "type": "linear", "polarity": "non-polar", "temp_prog": "ramp"},
        ]
    )


@pytest.fixture
def temp_reference_csv(tmp_path, webbook_export):
    """Write the WebBook-style export to a temporary CSV file."""
    csv_path = tmp_path / "nist_export.csv"
    webbook_export.to_csv(csv_path, index=False)
    return csv_path


@pytest.fixture
def temp_measured_csv(tmp_path, sample_measured):
    """Write the measured data to a temporary CSV file."""
    csv_path = tmp_path / "sample_data.csv"
    sample_measured.to_csv(csv_path, index=False)
    return csv_path
