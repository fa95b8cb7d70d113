import logging

import pytest
from click.testing import CliRunner

from cport import __version__
from cport.cli import REPORTERS, cli
from cport.exceptions import ContainerFault, ErrorKind, TransportError
from cport.utils import LogSettings

TOML = """
[cport]
image = "debian"
apt = ["libboost-dev"]

[cmake.option]
CMAKE_BUILD_TYPE = "Release"
"""


@pytest.fixture
def invoke(runtime):
    """Run the CLI against the recording runtime."""
    def _invoke(*args):
        return CliRunner().invoke(cli, list(args), obj={"runtime": runtime})
    return _invoke


class TestCommands:

    def test_build(self, invoke, runtime, project_dir):
        toml_path = project_dir(TOML)
        source = str(project_dir.root.resolve())

        result = invoke("-f", str(toml_path), "build")

        assert result.exit_code == 0, result.output
        assert runtime.call_names == ["list", "create", "start", "exec", "exec", "stop"]
        assert runtime.exec_argvs() == [
            ["cmake", f"-B{source}/_cport", f"-H{source}", "-GNinja", "-DCMAKE_BUILD_TYPE=Release"],
            ["cmake", "--build", f"{source}/_cport"],
        ]
        # build output reaches stdout
        assert f"$ cmake --build {source}/_cport" in result.stdout

    def test_install(self, invoke, runtime, project_dir):
        result = invoke("--config-toml", str(project_dir(TOML)), "install")

        assert result.exit_code == 0, result.output
        assert runtime.call_names == ["list", "create", "start", "exec", "exec", "stop"]
        assert runtime.exec_argvs() == [["apt", "update"], ["apt", "install", "-y", "libboost-dev"]]

    def test_default_config_is_cport_toml_in_cwd(self, invoke, runtime, project_dir, monkeypatch):
        project_dir(TOML)
        monkeypatch.chdir(project_dir.root)

        result = invoke("build")
        assert result.exit_code == 0, result.output
        assert "stop" in runtime.call_names

    def test_ps_lists_managed_containers(self, invoke, runtime):
        runtime.add_container({"cport.image": "debian", "cport.source": "/proj", "cport.build": "_cport"}, cid="d" * 64)

        result = invoke("ps", "--all")

        assert result.exit_code == 0
        assert "d" * 12 in result.stdout
        assert "/proj (_cport)" in result.stdout
        assert runtime.calls == [("list", ({"cport.source": None},))]

    def test_ps_hides_stopped_by_default(self, invoke, runtime):
        runtime.add_container({"cport.source": "/proj"}, cid="e" * 64)
        result = invoke("ps")
        assert result.exit_code == 0
        assert "e" * 12 not in result.stdout

    def test_version(self, invoke):
        result = invoke("--version")
        assert __version__ in result.output


class TestErrorReporting:
    """Every error class ends the process with status 1 and a readable report."""

    def test_fault_on_create(self, invoke, runtime, project_dir, caplog):
        runtime.create_fault = ContainerFault(409, 'Conflict. The container name "/proj" is already in use')

        with caplog.at_level(logging.ERROR):
            result = invoke("-f", str(project_dir(TOML)), "build")

        assert result.exit_code == 1
        assert "reason = 409" in caplog.text
        assert "already in use" in caplog.text
        assert "start" not in runtime.call_names

    def test_missing_config(self, invoke, runtime, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            result = invoke("-f", str(tmp_path / "nope.toml"), "build")

        assert result.exit_code == 1
        assert "Configuration error" in caplog.text
        assert runtime.calls == []

    def test_undecodable_config_is_a_configuration_error(self, invoke, runtime, project_dir, caplog):
        toml_path = project_dir.root / "cport.toml"
        toml_path.write_bytes(b'[cport]\nimage = "deb\xffian"\n')

        with caplog.at_level(logging.ERROR):
            result = invoke("-f", str(toml_path), "build")

        assert result.exit_code == 1
        assert "Configuration error" in caplog.text
        assert "unexpected" not in caplog.text
        assert runtime.calls == []

    def test_build_tool_failure(self, invoke, runtime, project_dir, caplog):
        runtime.exit_codes["cmake --build"] = 2

        with caplog.at_level(logging.ERROR):
            result = invoke("-f", str(project_dir(TOML)), "build")

        assert result.exit_code == 1
        assert "exit code 2" in caplog.text
        assert runtime.call_names[-1] == "stop"

    def test_transport_error(self, invoke, runtime, project_dir, caplog):
        runtime.start_fault = TransportError("Failed to start container: connection refused")

        with caplog.at_level(logging.ERROR):
            result = invoke("-f", str(project_dir(TOML)), "build")

        assert result.exit_code == 1
        assert "connection refused" in caplog.text

    def test_every_error_kind_has_a_reporter(self):
        assert set(REPORTERS) == set(ErrorKind)


class TestVerbosity:

    @pytest.mark.parametrize("flags, level", [
        ({}, logging.WARNING),
        ({"quiet": True}, logging.ERROR),
        ({"verbose": True}, logging.INFO),
        ({"debug": True}, logging.DEBUG),
        ({"debug": True, "quiet": True}, logging.DEBUG),
        ({"verbose": True, "quiet": True}, logging.INFO),
    ])
    def test_flags_map_to_four_levels(self, flags, level):
        assert LogSettings.from_flags(**flags).level == level

    def test_module_levels_parsed(self):
        settings = LogSettings.from_flags(log_levels="loc=debug, docker=INFO,bogus")
        assert settings.module_levels == {"loc": "DEBUG", "docker": "INFO"}

    def test_cli_applies_level_and_aliases(self, invoke):
        result = invoke("-v", "-l", "loc=DEBUG", "ps")

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("cport.builder.locator").level == logging.DEBUG
        logging.getLogger("cport.builder.locator").setLevel(logging.NOTSET)
