"""Unit tests for the service entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from shopping_gateway.main import main

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.unit
class TestMain:
    """Tests for main()."""

    def test_runs_uvicorn_with_configured_address(self, test_config_file: Path) -> None:  # noqa: ARG002
        with patch("shopping_gateway.main.uvicorn.run") as run:
            assert main() == 0

        assert len(run.call_args.args) == 1
        assert run.call_args.kwargs["host"] == "0.0.0.0"
        assert run.call_args.kwargs["port"] == 3000
        assert run.call_args.kwargs["access_log"] is False

    def test_port_override_from_environment(
        self,
        test_config_file: Path,  # noqa: ARG002
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PORT", "8081")

        with patch("shopping_gateway.main.uvicorn.run") as run:
            main()

        assert run.call_args.kwargs["port"] == 8081

    def test_missing_config_exits_with_1(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        missing = tmp_path / "absent.yaml"
        monkeypatch.setenv("CONFIG_PATH", str(missing))

        with patch("shopping_gateway.main.uvicorn.run") as run:
            assert main() == 1

        run.assert_not_called()
        assert f"cannot load {missing}" in capsys.readouterr().err
