import pytest

from mazegen.maze.config import ConfigError, MapConfig


def _options(**overrides):
    opts = {
        "bounds": {"width": 28, "height": 31},
        "path": {"min": 300},
        "teleporter": {"min": 1, "max": 4},
        "builderPool": {"managerCount": {"min": 6, "max": 10}},
        "builder": {"turnDistance": {"min": 4, "max": 12}},
    }
    opts.update(overrides)
    return opts


def test_defaults_are_valid():
    cfg = MapConfig().validate()
    assert (cfg.width, cfg.height, cfg.half_width) == (28, 31, 14)
    assert cfg.path_min == 300 and cfg.path_max is None
    assert not cfg.has_budget


@pytest.mark.parametrize(
    "kwargs,field,code",
    [
        ({"width": 27}, "width", "parity"),
        ({"height": 30}, "height", "parity"),
        ({"width": 10}, "width", "min"),
        ({"height": 11}, "height", "min"),
        ({"path_min": 434}, "path_min", "max"),
        ({"path_max": 500}, "path_max", "max"),
        ({"path_min": 200, "path_max": 200}, "path_min", "range"),
        ({"path_min": -1}, "path_min", "min"),
        ({"path_max": 0}, "path_max", "min"),
        ({"teleporter_max": 16}, "teleporter_max", "max"),
        ({"teleporter_min": 5, "teleporter_max": 4}, "teleporter_min", "range"),
        ({"teleporter_min": -1}, "teleporter_min", "min"),
        ({"manager_min": 0}, "manager_min", "min"),
        ({"manager_min": 11}, "manager_min", "range"),
        ({"turn_max": 0}, "turn_max", "min"),
        ({"turn_min": 13}, "turn_min", "range"),
        ({"max_attempts": 0}, "max_attempts", "min"),
        ({"max_time_ms": 0}, "max_time_ms", "min"),
        ({"width": True}, "width", "type"),
        ({"height": 31.0}, "height", "type"),
        ({"debug": "yes"}, "debug", "type"),
    ],
)
def test_invalid_configs(kwargs, field, code):
    with pytest.raises(ConfigError) as exc:
        MapConfig(**kwargs).validate()
    assert exc.value.field == field
    assert exc.value.code == code
    assert isinstance(exc.value, ValueError)


def test_teleporter_max_just_below_half_height():
    MapConfig(width=12, height=13, path_min=None, teleporter_max=6).validate()
    with pytest.raises(ConfigError):
        MapConfig(width=12, height=13, path_min=None, teleporter_max=7).validate()


def test_from_options_maps_nested_keys():
    cfg = MapConfig.from_options(
        _options(
            path={"min": 100, "max": 200},
            debug=True,
            generationConstraints={"maxAttempts": 5, "maxTimeMillis": 1000},
            seed=42,
        )
    )
    assert cfg == MapConfig(
        path_min=100,
        path_max=200,
        debug=True,
        max_attempts=5,
        max_time_ms=1000,
        seed=42,
    )
    assert cfg.has_budget


def test_from_options_without_path_has_no_bounds():
    opts = _options()
    del opts["path"]
    cfg = MapConfig.from_options(opts)
    assert cfg.path_min is None and cfg.path_max is None


def test_from_options_rejects_unknown_keys():
    with pytest.raises(ConfigError) as exc:
        MapConfig.from_options(_options(bounds={"width": 28, "height": 31, "depth": 1}))
    assert exc.value.field == "bounds.depth"
    assert exc.value.code == "unknown"
    with pytest.raises(ConfigError) as exc:
        MapConfig.from_options(_options(colour="blue"))
    assert exc.value.field == "colour"


def test_from_options_requires_sections_and_leaves():
    opts = _options()
    del opts["builder"]
    with pytest.raises(ConfigError) as exc:
        MapConfig.from_options(opts)
    assert (exc.value.field, exc.value.code) == ("builder", "required")
    with pytest.raises(ConfigError) as exc:
        MapConfig.from_options(_options(bounds={"width": 28}))
    assert (exc.value.field, exc.value.code) == ("bounds.height", "required")


def test_from_options_validates_values():
    with pytest.raises(ConfigError) as exc:
        MapConfig.from_options(_options(bounds={"width": 29, "height": 31}))
    assert exc.value.field == "width"
    with pytest.raises(ConfigError):
        MapConfig.from_options(_options(bounds="28x31"))
    with pytest.raises(ConfigError):
        MapConfig.from_options([("bounds", {})])


def test_env_overrides():
    cfg = MapConfig().with_env_overrides(
        {"MAZEGEN_SEED": "42", "MAZEGEN_DEBUG": "1", "MAZEGEN_MAX_ATTEMPTS": "7", "UNRELATED": "x"}
    )
    assert (cfg.seed, cfg.debug, cfg.max_attempts, cfg.max_time_ms) == (42, True, 7, None)


def test_env_overrides_absent_returns_same_config():
    cfg = MapConfig(seed=3)
    assert cfg.with_env_overrides({}) is cfg


def test_env_debug_falsey_values():
    cfg = MapConfig(debug=True)
    for raw in ("0", "false", "no", ""):
        assert cfg.with_env_overrides({"MAZEGEN_DEBUG": raw}).debug is False


def test_env_overrides_are_validated():
    with pytest.raises(ConfigError) as exc:
        MapConfig().with_env_overrides({"MAZEGEN_MAX_TIME_MS": "soon"})
    assert exc.value.code == "type"
    with pytest.raises(ConfigError) as exc:
        MapConfig().with_env_overrides({"MAZEGEN_MAX_ATTEMPTS": "0"})
    assert exc.value.field == "max_attempts"


def test_env_overrides_read_process_environment(monkeypatch):
    monkeypatch.setenv("MAZEGEN_SEED", "1234")
    assert MapConfig().with_env_overrides().seed == 1234
