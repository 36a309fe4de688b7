"""
Test Configuration and CLI

Validation of PermutationConfig and the single --symmetry switch.
"""

import pytest

import permnet.cli as cli
from permnet.core.config import PermutationConfig, get_default_config


def test_defaults():
    config = get_default_config()
    assert config.width == 4
    assert config.middle == 3
    assert config.eta == 0.6
    assert config.iterations == 256
    assert config.clip_threshold == 1.0
    assert config.seed == 1
    assert not config.symmetry
    assert config == PermutationConfig()


def test_head_count_from_width():
    assert PermutationConfig().n_heads == 1
    assert PermutationConfig(symmetry=True).n_heads == 24
    assert PermutationConfig(width=3, symmetry=True).n_heads == 6


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"middle": 0},
    {"iterations": -1},
    {"eta": 0.0},
    {"clip_threshold": 0.0},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        PermutationConfig(**kwargs)


def test_symmetry_warns_on_wide_records():
    with pytest.warns(UserWarning, match="5040 output heads"):
        PermutationConfig(width=7, symmetry=True)


def test_presets():
    import permnet.core as core

    assert core.__all__ == [
        'PermutationConfig', 'get_default_config', 'FAST_TEST_CONFIG'
    ]
    assert core.FAST_TEST_CONFIG.iterations == 16


def test_cli_symmetry_flag(monkeypatch):
    seen = []
    monkeypatch.setattr(cli, "run", lambda config: seen.append(config))

    assert cli.main([]) == 0
    assert cli.main(["--symmetry"]) == 0
    assert [c.symmetry for c in seen] == [False, True]


def test_cli_failure_exit_code(monkeypatch, capsys):
    def fail(config):
        raise RuntimeError("load failed")

    monkeypatch.setattr(cli, "run", fail)

    assert cli.main([]) == 1
    assert "ERROR: load failed" in capsys.readouterr().out


def test_cli_rejects_unknown_flags():
    with pytest.raises(SystemExit):
        cli.main(["--epochs", "3"])
