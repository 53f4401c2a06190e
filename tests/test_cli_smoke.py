"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner for testing without touching capture devices or OpenRGB.
"""

import json
import logging
import signal
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ambiway.cli.main import cli
from ambiway.exceptions import ControllerConnectionError
from ambiway.models import AppConfig


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_process_state():
    """Undo the logging handlers and SIGTERM handler the run command installs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    sigterm = signal.getsignal(signal.SIGTERM)
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    signal.signal(signal.SIGTERM, sigterm)


@pytest.fixture
def config_file(temp_dir):
    """Starter config written to a temp directory."""
    path = temp_dir / "config.toml"
    path.write_text(AppConfig.default_template())
    return path


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        """Test main CLI help displays."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Ambilight for OpenRGB' in result.output
        assert '--dry-run' in result.output
        assert '--config' in result.output

    def test_version_flag(self, runner):
        """Test --version flag works."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize("command", [
        ['config', '--help'],
        ['regions', '--help'],
        ['cams', '--help'],
        ['controller', '--help'],
    ])
    def test_subcommand_help(self, runner, command):
        """Every command group has help."""
        result = runner.invoke(cli, command)
        assert result.exit_code == 0


@pytest.mark.integration
class TestConfigCommands:
    """Test the config command group."""

    def test_init_writes_template(self, runner, temp_dir):
        """init creates a loadable config."""
        path = temp_dir / "new" / "config.toml"
        result = runner.invoke(cli, ['-c', str(path), 'config', 'init'])

        assert result.exit_code == 0
        assert AppConfig.load(path).monitor_count == 1

    def test_init_refuses_overwrite(self, runner, config_file):
        """init keeps an existing file unless forced."""
        result = runner.invoke(cli, ['-c', str(config_file), 'config', 'init'])
        assert result.exit_code == 1

        result = runner.invoke(cli, ['-c', str(config_file), 'config', 'init', '--force'])
        assert result.exit_code == 0
        assert config_file.with_suffix('.toml.bak').exists()

    def test_init_unwritable_path(self, runner, temp_dir):
        """A write error is reported without a traceback."""
        path = temp_dir / "config.toml"
        with patch('ambiway.cli.commands.config.PydanticPersistence.write_text',
                   side_effect=PermissionError(13, "Permission denied")):
            result = runner.invoke(cli, ['-c', str(path), 'config', 'init'])

        assert result.exit_code == 1
        assert 'Could not write' in result.output
        assert 'Permission denied' in result.output
        assert not isinstance(result.exception, PermissionError)

    def test_show(self, runner, config_file):
        """show prints the config as JSON with file key names."""
        result = runner.invoke(cli, ['-c', str(config_file), 'config', 'show'])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data['settings']['zone_id_list'] == [0]
        assert data['settings']['size'] == 40

    def test_validate(self, runner, config_file):
        """validate reports per-monitor LED totals."""
        result = runner.invoke(cli, ['-c', str(config_file), 'config', 'validate'])

        assert result.exit_code == 0
        assert 'Valid' in result.output
        assert '112 LEDs' in result.output

    def test_validate_invalid(self, runner, temp_dir):
        """validate fails on a bad file."""
        path = temp_dir / "bad.toml"
        path.write_text("[settings]\nsize = 0\n")
        result = runner.invoke(cli, ['-c', str(path), 'config', 'validate'])
        assert result.exit_code == 1

    def test_path(self, runner, config_file):
        """path prints the selected file."""
        result = runner.invoke(cli, ['-c', str(config_file), 'config', 'path'])
        assert str(config_file) in result.output


@pytest.mark.integration
class TestRegionsCommand:
    """Test the region preview."""

    def test_preview(self, runner, config_file):
        """One line per LED for the given frame size."""
        result = runner.invoke(
            cli, ['-c', str(config_file), 'regions', '--width', '1920', '--height', '1080']
        )

        assert result.exit_code == 0
        assert '112 LEDs' in result.output
        assert 'x=1880' in result.output

    def test_requires_size(self, runner, config_file):
        """Without a configured size, width and height are required."""
        result = runner.invoke(cli, ['-c', str(config_file), 'regions'])
        assert result.exit_code != 0

    def test_layout_error(self, runner, config_file):
        """Geometry errors exit with status 1."""
        result = runner.invoke(cli, ['-c', str(config_file), 'regions', '-W', '30', '-H', '30'])
        assert result.exit_code == 1
        assert 'Invalid LED layout' in result.output


@pytest.mark.integration
class TestDeviceCommands:
    """Test device listing with devices mocked."""

    def test_cams_list(self, runner):
        """Cameras are listed with their resolution."""
        with patch('ambiway.cli.commands.cams.list_cameras', return_value=[(0, 1920, 1080)]):
            result = runner.invoke(cli, ['cams', 'list'])

        assert result.exit_code == 0
        assert '[0] 1920x1080' in result.output

    def test_cams_list_empty(self, runner):
        """No cameras is not an error."""
        with patch('ambiway.cli.commands.cams.list_cameras', return_value=[]):
            result = runner.invoke(cli, ['cams', 'list'])

        assert result.exit_code == 0
        assert 'No capture devices found' in result.output

    def test_controller_list(self, runner, config_file):
        """Devices and zones are listed."""
        with patch('ambiway.cli.commands.controller.OpenRGBLightingClient') as client_cls:
            client = client_cls.return_value.__enter__.return_value
            client.list_devices.return_value = [(0, "Strip", [(0, "Zone A", 112)])]
            result = runner.invoke(cli, ['-c', str(config_file), 'controller', 'list'])

        assert result.exit_code == 0
        assert '[0] Strip' in result.output
        assert 'zone 0: Zone A (112 LEDs)' in result.output

    def test_controller_unreachable(self, runner, config_file):
        """An unreachable server exits with status 1."""
        with patch('ambiway.cli.commands.controller.OpenRGBLightingClient') as client_cls:
            client_cls.return_value.__enter__.side_effect = ControllerConnectionError("127.0.0.1:6742")
            result = runner.invoke(cli, ['-c', str(config_file), 'controller', 'list'])

        assert result.exit_code == 1


@pytest.mark.integration
class TestRunCommand:
    """Test the default run command."""

    def test_missing_config_exits(self, runner, temp_dir):
        """A missing config file is reported and exits with 1."""
        result = runner.invoke(cli, [
            '-c', str(temp_dir / 'missing.toml'),
            '--log-file', str(temp_dir / 'ambiway.log'),
        ])

        assert result.exit_code == 1
        assert 'Config file not found' in result.output

    def test_runs_app(self, runner, config_file, temp_dir):
        """The app is built from the config and run."""
        with patch('ambiway.app.AmbiwayApp') as app_cls:
            result = runner.invoke(cli, [
                '-c', str(config_file),
                '--dry-run',
                '--log-file', str(temp_dir / 'ambiway.log'),
            ])

        assert result.exit_code == 0
        assert app_cls.call_args[1]['dry_run'] is True
        app_cls.return_value.run.assert_called_once()
        app_cls.return_value.shutdown.assert_called_once()
