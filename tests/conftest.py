import os
from pathlib import Path

import pytest

TESTS = Path(__file__).parent

# Directory -> marker; a test gets the marker of the tree it lives in.
DIR_MARKERS = {
    TESTS / "changelog_scout" / "core": pytest.mark.unit,
    TESTS / "changelog_scout" / "infra": pytest.mark.integration,
    TESTS / "changelog_scout" / "app": pytest.mark.e2e,
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep developer settings (.env, exported tokens) out of every test.
    for key in list(os.environ):
        if key.startswith("CHANGELOG_SCOUT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CHANGELOG_SCOUT_DIRECTORIES__HOME", str(tmp_path / "home"))
    yield


def pytest_collection_modifyitems(config, items):
    for item in items:
        path = Path(str(item.path)).resolve()
        for base, marker in DIR_MARKERS.items():
            if path.is_relative_to(base.resolve()):
                item.add_marker(marker)
