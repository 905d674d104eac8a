"""Tests for the command line front end."""

import logging
import pytest
from fibo import cli
from fibo.fibonacci import Strategy


class TestArguments:

    def test_missing_args_prints_usage(self, capsys):
        assert cli.main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("usage: fibo")

    def test_missing_modulus_prints_usage(self, capsys):
        assert cli.main(['10']) == 0
        assert "usage:" in capsys.readouterr().out

    def test_malformed_index(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(['ten', '1000'])
        assert exc.value.code == 2
        assert "invalid literal" in capsys.readouterr().err

    def test_out_of_range_for_type(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(['-5', '1000', '--type', 'u64'])
        assert exc.value.code == 2
        assert "U64 out of range" in capsys.readouterr().err

    def test_zero_modulus(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(['10', '0'])
        assert exc.value.code == 2
        assert "non-zero" in capsys.readouterr().err

    def test_negative_modulus(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(['10', '-7'])
        assert exc.value.code == 2
        assert "must be positive" in capsys.readouterr().err

    def test_overflow_during_computation(self, capsys):
        # -(-128) has no I8 representation.
        with pytest.raises(SystemExit) as exc:
            cli.main(['-128', '100', '-t', 'i8', '-s', 'sequential'])
        assert exc.value.code == 2
        assert "I8 out of range: 128" in capsys.readouterr().err

    def test_full_width_u64_modulus(self, capsys):
        m = str((1 << 64) - 59)
        assert cli.main(['100', m, '-t', 'u64']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 4  # recursive skipped above the ceiling
        values = {line.split('=')[2].split(' (')[0].strip() for line in lines}
        assert len(values) == 1

    def test_unknown_strategy(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(['10', '1000', '-s', 'binet'])
        assert exc.value.code == 2
        assert "Unknown strategy" in capsys.readouterr().err


class TestRun:

    def test_all_strategies(self, capsys):
        assert cli.main(['10', '1000']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == len(Strategy)
        for line, s in zip(lines, Strategy):
            assert line.startswith(s.label)
            assert "F(n)%1000=       55 (" in line

    def test_single_strategy(self, capsys):
        assert cli.main(['1000000', '1000', '-s', 'matrix_pow_recursive']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("Mat (rec) ")
        assert "=      875 (" in lines[0]

    def test_negative_index(self, capsys):
        assert cli.main(['-1000', '1000000000', '-s', 'sequential']) == 0
        assert "=-849228875 (" in capsys.readouterr().out

    def test_typed_run(self, capsys):
        n = str((1 << 64) - 1)
        assert cli.main([n, '1000000000', '-t', 'u64', '-s', 'matrix_pow_iterative']) == 0
        assert f"n={n}," in capsys.readouterr().out

    def test_recursive_skipped_above_ceiling(self, capsys, caplog):
        with caplog.at_level(logging.WARNING, logger='fibo.cli'):
            assert cli.main(['100', '1000', '-s', 'recursive', '-s', 'sequential']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("Sequential")
        assert "skipping recursive" in caplog.text


class TestBench:

    def test_run_bench_scaled(self, capsys):
        strategies = [Strategy.SEQUENTIAL, Strategy.MATRIX_POW_ITERATIVE]
        collector = cli.run_bench(strategies, scale=10_000)
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 2
        assert collector.measurements[0].n == 1000
        assert collector.measurements[0].value == 849228875
        assert collector.measurements[1].n == (1 << 64) - 1

    def test_bench_flag(self, capsys):
        assert cli.main(['--bench', '--bench-scale', '100000', '-s', 'sequential']) == 0
        out = capsys.readouterr().out
        assert out.startswith("Sequential: n=")
        assert "F(n)%1000000000=" in out
