"""Integration tests for Omniwave."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from omniwave import (
    CollectingSink,
    FixedDatasetTable,
    SequencerState,
    WaveSequencer,
    load_table,
    main,
)
from omniwave.config import ENV_DATA_DIR, ENV_DAYS_BEFORE


class TestEndToEnd:
    """End-to-end generation tests."""

    def test_zero_table_wave(self, zero_table):
        """An all-zero table yields a flat wave that completes."""
        sequencer = WaveSequencer(1.0, 0.0, 60, 64, table=zero_table)
        sink = CollectingSink()

        completion = sequencer.run(sink)

        assert completion.successful
        assert len(sink.points) == 24
        assert all(v == 0.0 for p in sink.points for v in p.values)

    def test_all_entry_points_agree(self, ramp_table):
        """run, run_async and points produce identical output."""
        sink = CollectingSink()
        WaveSequencer(2.0, 0, 45, 64, table=ramp_table).run(sink)

        async_sink = CollectingSink()
        asyncio.run(WaveSequencer(2.0, 0, 45, 64, table=ramp_table).run_async(async_sink))

        lazy = list(WaveSequencer(2.0, 0, 45, 64, table=ramp_table).points())

        assert sink.points == async_sink.points == lazy
        assert len(lazy) == 64

    def test_from_directory_pipeline(self, data_dir, ramp_table):
        """Tables read from files compute the same wave as in-memory tables."""
        from_files = WaveSequencer(1.0, 0, 60, 64, table=load_table(data_dir)).collect()
        in_memory = WaveSequencer(1.0, 0, 60, 64, table=ramp_table).collect()

        assert from_files == in_memory

    def test_concurrent_instances_share_table(self, data_dir):
        """Independent sequencers on one shared table run in parallel."""
        table = FixedDatasetTable.from_directory(data_dir)
        sequencers = [WaveSequencer(1.0, 0, 60, factor, table=table)
                      for factor in (2, 16, 64, 64)]

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda s: s.collect(), sequencers))

        assert all(len(points) == 24 for points in results)
        assert results[2] == results[3]
        assert results[0] != results[2]
        assert all(s.state is SequencerState.COMPLETED for s in sequencers)
        assert sequencers[0].table is sequencers[3].table


def point_lines(text):
    return [line for line in text.splitlines() if "] [#]: " in line]


class TestCommandLine:
    """Tests for the omniwave command."""

    def test_generates_wave(self, data_dir, capsys):
        code = main(["1", "0", "60", "64", "--data-dir", str(data_dir)])
        out = capsys.readouterr().out

        assert code == 0
        lines = point_lines(out)
        assert len(lines) == 24
        assert lines[0].split("]: ", 1)[1].startswith("1.0000000000000000, ")
        assert "[+]: Wave generated successfully!" in out

    def test_precision(self, data_dir, capsys):
        main(["0.5", "0", "60", "64", "--data-dir", str(data_dir), "--precision", "3"])
        lines = point_lines(capsys.readouterr().out)

        assert len(lines) == 12
        assert lines[0].split("]: ", 1)[1].startswith("0.500, ")

    def test_async_run(self, data_dir, capsys):
        code = main(["1", "0", "60", "64", "--data-dir", str(data_dir), "--async"])

        assert code == 0
        assert len(point_lines(capsys.readouterr().out)) == 24

    def test_summary(self, data_dir, capsys):
        code = main(["1", "0", "60", "64", "--data-dir", str(data_dir), "--summary"])
        out = capsys.readouterr().out

        assert code == 0
        assert "WaveSummary:" in out
        assert "Points: 24" in out

    def test_environment_defaults(self, data_dir, monkeypatch, capsys):
        monkeypatch.setenv(ENV_DATA_DIR, str(data_dir))
        monkeypatch.setenv(ENV_DAYS_BEFORE, "0.5")

        assert main([]) == 0
        assert len(point_lines(capsys.readouterr().out)) == 12

    @pytest.mark.parametrize("argv, message", [
        (["1"], "All arguments are required"),
        (["1", "0", "60"], "All arguments are required"),
        (["1", "0", "60", "64", "5"], "only accepts a total of 4 arguments"),
        (["1", "-1", "60", "64"], "The bailout cannot be a negative number."),
        (["1", "0", "60", "1"], "within 2 - 10,000"),
        (["1", "0", "60", "20000"], "within 2 - 10,000"),
        (["1", "0", "sixty", "64"], "must be a number"),
        (["0", "0", "60", "64"], "singularity must be a positive number"),
    ])
    def test_invalid_arguments(self, data_dir, capsys, argv, message):
        code = main(argv + ["--data-dir", str(data_dir)])
        captured = capsys.readouterr()

        assert code == 2
        assert message in captured.err
        assert "usage:" in captured.err
        assert point_lines(captured.out) == []

    def test_missing_datasets(self, tmp_path, capsys):
        code = main(["1", "0", "60", "64", "--data-dir", str(tmp_path / "nowhere")])

        assert code == 1
        assert "Cannot load datasets" in capsys.readouterr().err
