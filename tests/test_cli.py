"""
Unit tests for the command line entry point.
"""

from pathlib import Path

import pytest

from asciigrav import cli
from asciigrav.cli import build_parser, load_parameters, main

CONFIG_DIR = Path(__file__).parent.parent / 'configs'


class TestParameterOverrides:
    """Command line flags override the configuration file."""

    def test_defaults_without_config(self):
        params = load_parameters(build_parser().parse_args([]))
        assert params.n_bodies == 1000
        assert params.max_ticks is None

    def test_flags_override_file(self):
        args = build_parser().parse_args([
            str(CONFIG_DIR / 'small_config.yaml'),
            '--bodies', '9',
            '--ticks', '3',
            '--tps', '50',
            '--seed', '5',
            '--force-method', 'pairwise'
        ])
        params = load_parameters(args)

        assert params.n_bodies == 9
        assert params.max_ticks == 3
        assert params.ticks_per_second == 50
        assert params.seed == 5
        assert params.force_method == 'pairwise'
        # Untouched values come from the file
        assert params.mass_floor == 0.01

    def test_invalid_force_method_flag(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--force-method', 'tree'])


class TestExitCodes:
    """Graceful runs exit 0, configuration problems exit 2."""

    def test_headless_run(self, capsys):
        code = main(['--headless', '--bodies', '5', '--ticks', '3', '--seed', '1'])

        assert code == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "Seed: 1" in out
        assert "Final tick: 3" in out

    def test_live_run_with_tick_limit(self, capsys):
        code = main(['--bodies', '4', '--ticks', '2', '--tps', '1000', '--seed', '2'])

        assert code == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "\r0" in out
        assert "\r1" in out

    def test_keyboard_interrupt_is_graceful(self, monkeypatch, capsys):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, 'run_live', interrupted)
        assert main(['--bodies', '3', '--seed', '3']) == cli.EXIT_OK

    def test_missing_config_file(self, capsys):
        assert main(['does_not_exist.yaml']) == cli.EXIT_CONFIG_ERROR
        assert "not found" in capsys.readouterr().err

    def test_invalid_parameters(self, capsys):
        assert main(['--bodies', '0', '--headless']) == cli.EXIT_CONFIG_ERROR
        assert "ERROR" in capsys.readouterr().err

    def test_bad_yaml_value(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("physics:\n  force_method: tree\n")

        assert main([str(path)]) == cli.EXIT_CONFIG_ERROR
        assert "ERROR" in capsys.readouterr().err

    def test_scalar_section(self, tmp_path, capsys):
        path = tmp_path / "scalar.yaml"
        path.write_text("bodies: 5\n")

        assert main([str(path), '--headless']) == cli.EXIT_CONFIG_ERROR
        assert "section 'bodies' must be a mapping" in capsys.readouterr().err
