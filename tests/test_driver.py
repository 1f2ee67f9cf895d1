"""
Tests for the demo driver and its command line.
"""

import pytest
from typer.testing import CliRunner

from prodcode import InMemoryStorage, ProductCode
from prodcode.driver import SEPARATOR, app, run


runner = CliRunner()


class TestRun:
    """Test the insert-then-update scenario."""

    def test_scenario_output(self):
        """Test MO is listed after the insert and MV alone after the rename."""
        lines = []
        with InMemoryStorage() as storage:
            product = run(storage, echo=lines.append)
            codes = [str(code) for code in ProductCode.all(storage)]

        assert lines == ["MO", SEPARATOR, "MV"]
        assert codes == ["MV"]
        assert product.code == "MV"
        assert product.previous_code is None

    def test_scenario_keeps_other_rows(self):
        lines = []
        with InMemoryStorage() as storage:
            ProductCode("SW", "M", "Software").save(storage)
            run(storage, echo=lines.append)

        before, after = lines[:lines.index(SEPARATOR)], lines[lines.index(SEPARATOR) + 1:]
        assert sorted(before) == ["MO", "SW"]
        assert sorted(after) == ["MV", "SW"]


class TestCommandLine:
    """Test the prodcode-demo command."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("PRODCODE_CONFIG", "PRODCODE_URL", "PRODCODE_USER", "PRODCODE_PASSWORD"):
            monkeypatch.delenv(name, raising=False)

    def test_demo_with_config(self, tmp_path):
        db_path = tmp_path / "sample.db"
        config = tmp_path / "db.properties"
        config.write_text(f"url=sqlite:///{db_path}\nuser=app\npassword=app\n")

        result = runner.invoke(app, ["--config", str(config)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "MO" in lines
        assert "MV" in lines
        assert lines.count(SEPARATOR) == 1
        assert db_path.exists()

    def test_demo_missing_config_exits_nonzero(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "absent.properties")])

        assert result.exit_code == 1

    def test_demo_storage_failure_exits_nonzero(self, tmp_path):
        config = tmp_path / "db.properties"
        config.write_text(f"url=sqlite:///{tmp_path / 'missing' / 'sample.db'}\n")

        result = runner.invoke(app, ["--config", str(config)])

        assert result.exit_code == 1
