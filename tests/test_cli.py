"""Tests for the command-line interface (crudgen.cli).

Covers:
- Sub-command and alias parsing
- Framework resolution (flag > crudgen.json > env > default)
- Exit status of successful and failing commands
- End-to-end command runs against tmp_path projects
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from crudgen.cli import build_parser, main, resolve_config
from crudgen.config import Framework, ProjectFile


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "CRUDGEN_PROJECT_ROOT",
        "CRUDGEN_FRAMEWORK",
        "CRUDGEN_INSTALL_TIMEOUT",
        "CRUDGEN_SKIP_INSTALL",
    ):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParser:
    @pytest.mark.parametrize("command", ["generate:module", "g:m"])
    def test_module_aliases(self, command):
        args = build_parser().parse_args([command, "order"])
        assert args.name == "order"
        assert args.reads_project_file is True

    @pytest.mark.parametrize("command", ["generate:router", "g:r"])
    def test_router_aliases(self, command):
        args = build_parser().parse_args([command, "health"])
        assert args.name == "health"

    def test_init(self):
        args = build_parser().parse_args(["-f", "hono", "init", "api", "--skip-install"])
        assert args.project_name == "api"
        assert args.framework == "hono"
        assert args.skip_install is True
        assert args.reads_project_file is False

    def test_skip_install_defaults_to_none(self):
        assert build_parser().parse_args(["init", "api"]).skip_install is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_framework(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-f", "express", "g:m", "order"])


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_default_is_elysia(self, tmp_path: Path):
        args = build_parser().parse_args(["--cwd", str(tmp_path), "g:m", "order"])
        config = resolve_config(args)
        assert config.framework is Framework.ELYSIA
        assert config.project_root == tmp_path.resolve()

    def test_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CRUDGEN_FRAMEWORK", "hono")
        args = build_parser().parse_args(["--cwd", str(tmp_path), "g:m", "order"])
        assert resolve_config(args).framework is Framework.HONO

    def test_project_file_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CRUDGEN_FRAMEWORK", "elysia")
        ProjectFile(name="api", framework=Framework.HONO).save(tmp_path)
        args = build_parser().parse_args(["--cwd", str(tmp_path), "g:m", "order"])
        assert resolve_config(args).framework is Framework.HONO

    def test_flag_beats_project_file(self, tmp_path: Path):
        ProjectFile(name="api", framework=Framework.HONO).save(tmp_path)
        args = build_parser().parse_args(["--cwd", str(tmp_path), "-f", "elysia", "g:m", "order"])
        assert resolve_config(args).framework is Framework.ELYSIA

    def test_init_ignores_project_file(self, tmp_path: Path):
        ProjectFile(name="api", framework=Framework.HONO).save(tmp_path)
        args = build_parser().parse_args(["--cwd", str(tmp_path), "init", "other"])
        assert resolve_config(args).framework is Framework.ELYSIA

    def test_skip_install_flag(self, tmp_path: Path):
        args = build_parser().parse_args(["--cwd", str(tmp_path), "init", "api", "--skip-install"])
        assert resolve_config(args).skip_install is True


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_init_and_module(self, tmp_path: Path):
        assert main(["--cwd", str(tmp_path), "init", "api", "--skip-install"]) == 0
        root = tmp_path / "api"
        assert (root / "src" / "routes.ts").is_file()

        assert main(["--cwd", str(root), "g:m", "Order"]) == 0
        assert (root / "src" / "modules" / "order" / "order.routes.ts").is_file()

    def test_failing_command_exits_zero(self, tmp_path: Path):
        # No project here: the route registry is missing.
        assert main(["--cwd", str(tmp_path), "g:m", "order"]) == 0

    def test_existing_module_exits_zero(self, elysia_project: Path):
        assert main(["--cwd", str(elysia_project), "g:m", "order"]) == 0
        assert main(["--cwd", str(elysia_project), "g:m", "order"]) == 0

    def test_router_on_elysia_exits_zero(self, elysia_project: Path):
        assert main(["--cwd", str(elysia_project), "g:r", "health"]) == 0
        assert not (elysia_project / "src" / "routers").exists()

    def test_invalid_env_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CRUDGEN_INSTALL_TIMEOUT", "soon")
        with patch("crudgen.cli.print_error") as mock_error:
            assert main(["--cwd", str(tmp_path), "g:m", "order"]) == 0
        mock_error.assert_called_once()

    def test_handler_receives_lowercased_name(self, tmp_path: Path):
        mock_generate = AsyncMock(return_value=tmp_path)
        with patch("crudgen.cli.ModuleGenerator") as mock_cls:
            mock_cls.return_value.generate = mock_generate
            main(["--cwd", str(tmp_path), "g:m", "Order"])
        mock_generate.assert_awaited_once_with("order")
