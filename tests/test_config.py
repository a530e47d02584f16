import pytest

from minesweeper_bot import Mode, SolverConfig


class TestSolverConfig:
    def test_defaults(self):
        config = SolverConfig()
        assert (config.rows, config.cols) == (16, 30)
        assert config.tick_interval_ms == 50
        assert config.mode is Mode.TIMED
        assert config.start_delay == 0.5
        assert config.tick_interval == 0.05

    def test_from_mapping_aliases(self):
        config = SolverConfig.from_mapping(
            {"rows": 9, "cols": 9, "tickIntervalMs": 10, "mode": "Fast"}
        )
        assert (config.rows, config.cols) == (9, 9)
        assert config.tick_interval_ms == 10
        assert config.mode is Mode.FAST

    def test_from_mapping_snake_case(self):
        config = SolverConfig.from_mapping({"tick_interval_ms": 0, "mode": Mode.TIMED})
        assert config.tick_interval_ms == 0

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="tickInterval"):
            SolverConfig.from_mapping({"tickInterval": 10})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"rows": 0},
            {"cols": -1},
            {"tick_interval_ms": -5},
            {"start_delay_ms": -1},
            {"max_ticks": 0},
            {"mode": "turbo"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)
