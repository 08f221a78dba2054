# -*- coding: utf-8 -*-
"""
CLI Tests - The ``pixelfx list`` and ``pixelfx apply`` commands.

Dependencies
------------
pytest

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from pixelfx.cli import main, parse_params


@pytest.fixture
def scenario_file(tmp_path, invert_scenario):
    path = tmp_path / 'in.npy'
    np.save(path, invert_scenario.to_array())
    return path


class TestParseParams:
    """Tests for KEY=VALUE parsing."""

    def test_types(self):
        params = parse_params(['radius=2', 'sigma=0.5', 'on_degenerate=raise'])
        assert params == {'radius': 2, 'sigma': 0.5, 'on_degenerate': 'raise'}
        assert isinstance(params['radius'], int)

    def test_empty(self):
        assert parse_params([]) == {}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match='KEY=VALUE'):
            parse_params(['radius'])


class TestList:
    """Tests for the list command."""

    def test_lists_all(self, capsys):
        assert main(['list']) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 21
        assert lines[0].startswith('blur')

    def test_by_category(self, capsys):
        assert main(['list', '--category', 'morphology']) == 0
        names = [line.split()[0] for line in capsys.readouterr().out.splitlines()]
        assert names == ['closing', 'dilation', 'erosion', 'opening']

    def test_bad_category(self):
        with pytest.raises(SystemExit):
            main(['list', '--category', 'spectral'])


class TestApply:
    """Tests for the apply command."""

    def test_invert(self, tmp_path, scenario_file):
        out = tmp_path / 'out.npy'
        assert main(['apply', 'invert', str(scenario_file), str(out), '--quiet']) == 0
        result = np.load(out)
        assert result.dtype == np.uint8
        assert result[0, 0].tolist() == [245, 235, 225]
        assert result[1, 1].tolist() == [0, 0, 0]

    def test_with_params(self, tmp_path, scenario_file):
        out = tmp_path / 'out.npy'
        argv = ['apply', 'increase_brightness', str(scenario_file), str(out),
                '--param', 'delta=5', '--quiet']
        assert main(argv) == 0
        assert np.load(out)[0, 0].tolist() == [15, 25, 35]

    def test_progress_printed(self, tmp_path, scenario_file, capsys):
        out = tmp_path / 'out.npy'
        assert main(['apply', 'invert', str(scenario_file), str(out)]) == 0
        assert '50%' in capsys.readouterr().err

    def test_unknown_filter(self, tmp_path, scenario_file):
        assert main(['apply', 'posterize', str(scenario_file),
                     str(tmp_path / 'out.npy')]) == 2

    def test_invalid_param_value(self, tmp_path, scenario_file):
        out = tmp_path / 'out.npy'
        assert main(['apply', 'sepia', str(scenario_file), str(out),
                     '--param', 'depth=-4']) == 2
        assert not out.exists()

    def test_unknown_param(self, tmp_path, scenario_file):
        assert main(['apply', 'sepia', str(scenario_file),
                     str(tmp_path / 'out.npy'), '--param', 'tone=3']) == 2

    def test_missing_input(self, tmp_path):
        assert main(['apply', 'invert', str(tmp_path / 'nope.npy'),
                     str(tmp_path / 'out.npy')]) == 2

    def test_bad_array(self, tmp_path):
        path = tmp_path / 'float.npy'
        np.save(path, np.zeros((2, 2, 3)))
        assert main(['apply', 'invert', str(path),
                     str(tmp_path / 'out.npy'), '--quiet']) == 2

    def test_verbose_flag(self, tmp_path, scenario_file):
        out = tmp_path / 'out.npy'
        assert main(['-vv', 'apply', 'invert', str(scenario_file), str(out),
                     '--quiet']) == 0
