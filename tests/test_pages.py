from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

ROOT = Path(__file__).resolve().parent.parent


def test_coverage_planner_names_export_anchor():
    at = AppTest.from_file(str(ROOT / "pages" / "3_Coverage Planner.py"), default_timeout=30)
    at.run()
    at.button[0].click().run()
    assert not at.exception
    captions = [c.value for c in at.caption]
    assert any("area centre" in c for c in captions)


def test_streamlit_entry_point_is_not_packaged():
    tomllib = pytest.importorskip("tomllib")
    with open(ROOT / "pyproject.toml", "rb") as f:
        modules = tomllib.load(f)["tool"]["setuptools"]["py-modules"]
    assert "app" not in modules
    assert "coverage_planner" in modules
