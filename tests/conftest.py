from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def fixtures_on_path(monkeypatch):
    """Make the sample API surfaces importable as ``applications_api``."""
    monkeypatch.syspath_prepend(str(FIXTURES))


@pytest.fixture
def sample_api():
    import applications_api

    return applications_api
