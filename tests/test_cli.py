from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from createproject import cli
from createproject.cli import build_parser, main
from tests.fixtures.fake_environment import FakeEnvironment


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for variable in (
        "CREATEPROJECT_EXAMPLES_URL",
        "CREATEPROJECT_DIEZ_VERSION",
        "CREATEPROJECT_TYPESCRIPT_VERSION",
        "CREATEPROJECT_DOWNLOAD_TIMEOUT",
    ):
        monkeypatch.delenv(variable, raising=False)


def test_parser_accepts_optional_name():
    args = build_parser().parse_args(["create", "--bare"])
    assert args.project_name is None
    assert args.bare is True


def test_missing_subcommand_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_cli_create_bare_project(tmp_path: Path, yarn_environment: FakeEnvironment, capsys):
    exit_code = main(
        ["create", "my-cool-app", "--bare", "--directory", str(tmp_path)],
        environment=yarn_environment,
    )
    assert exit_code == 0
    package = json.loads((tmp_path / "my-cool-app" / "package.json").read_text(encoding="utf-8"))
    assert package["name"] == "my-cool-app"
    output = capsys.readouterr().out
    assert "Success! A new Diez (DS) has been created at" in output
    assert "yarn diez --help" in output


def test_cli_prompts_for_missing_name(
    tmp_path: Path, yarn_environment: FakeEnvironment, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: "  prompted-app ")
    exit_code = main(["create", "--bare", "-d", str(tmp_path)], environment=yarn_environment)
    assert exit_code == 0
    assert (tmp_path / "prompted-app" / "package.json").exists()


def test_cli_reports_invalid_name(tmp_path: Path, yarn_environment: FakeEnvironment, capsys):
    exit_code = main(
        ["create", "node_modules", "--bare", "-d", str(tmp_path)],
        environment=yarn_environment,
    )
    assert exit_code == 1
    assert "Unable to create project with name node_modules." in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_cli_install_failure_exits_zero(tmp_path: Path, capsys):
    environment = FakeEnvironment(available={("yarnpkg",)}, failing={("yarn", "install")})
    exit_code = main(
        ["create", "my-cool-app", "--bare", "-d", str(tmp_path)],
        environment=environment,
    )
    assert exit_code == 0
    output = capsys.readouterr().out
    assert "Unable to install dependencies" in output
    assert "yarn install" in output


def _client(body: bytes, seen: list[str]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, content=body)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    ("body", "message"),
    [
        (b"", "empty response"),
        (b"x" * 2048, "Unable to extract the template project"),
    ],
    ids=["empty-body", "corrupt-archive"],
)
def test_cli_download_failure_shows_hint(
    tmp_path: Path, yarn_environment: FakeEnvironment, capsys, body: bytes, message: str
):
    seen: list[str] = []
    exit_code = main(
        ["create", "my-cool-app", "-d", str(tmp_path)],
        environment=yarn_environment,
        http_client=_client(body, seen),
    )

    assert exit_code == 1
    assert seen == ["https://examples.diez.org/10.6.0/createproject/project.tgz"]
    output = capsys.readouterr().out
    assert message in output
    assert "re-run this command with --bare" in output
    assert not yarn_environment.ran("yarn", "install")


def test_cli_rejects_invalid_settings(
    tmp_path: Path, yarn_environment: FakeEnvironment, monkeypatch: pytest.MonkeyPatch, capsys
):
    monkeypatch.setenv("CREATEPROJECT_DOWNLOAD_TIMEOUT", "soon")
    exit_code = main(["create", "my-cool-app", "--bare", "-d", str(tmp_path)], environment=yarn_environment)
    assert exit_code == 1
    output = capsys.readouterr().out
    assert "Invalid configuration" in output
    assert "CREATEPROJECT_DOWNLOAD_TIMEOUT" in output
    assert list(tmp_path.iterdir()) == []
