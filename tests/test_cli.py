import importlib
import json
import sys

import pytest

# run.py is imported as a module so parse_args/main can be exercised directly.

SMALL_ARGS = ['--width', '12', '--height', '13', '--path-min', '10', '--max-attempts', '200']


@pytest.fixture()
def run_module(monkeypatch):
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


@pytest.fixture()
def clean_env(monkeypatch):
    # Leave MAZEGEN_* unset for the test and restore whatever dotenv adds afterwards
    for key in ('MAZEGEN_SEED', 'MAZEGEN_DEBUG', 'MAZEGEN_MAX_ATTEMPTS', 'MAZEGEN_MAX_TIME_MS'):
        monkeypatch.setenv(key, 'x')
        monkeypatch.delenv(key)
    yield


def _json_from(out):
    return json.loads(out[out.index('{'):])


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    assert f"mazegen {run_module.__version__}" in capsys.readouterr().out


def test_default_command_is_generate(run_module):
    assert run_module.parse_args([]).command == 'generate'


def test_generate_prints_banner_and_map(run_module, clean_env, capsys):
    code = run_module.main(['generate', '--seed', '7'] + SMALL_ARGS)
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert 'mazegen' in out and 'Seed:' in out
    map_lines = [l for l in lines if len(l) == 12 and set(l) <= set('#.GT ')]
    assert len(map_lines) == 13
    assert code in (0, 1)


def test_stats_outputs_json(run_module, clean_env, capsys):
    code = run_module.main(['stats', '--seed', '7'] + SMALL_ARGS)
    data = _json_from(capsys.readouterr().out)
    assert data['seed'] == 7
    assert code == (0 if data['valid'] else 1)
    assert data['metrics']['attempts'] >= 1
    assert data['path_blocks'] >= 10 or not data['valid']


def test_invalid_config_exit_code(run_module, clean_env, capsys):
    # Default path minimum does not fit a 12x13 grid
    assert run_module.main(['generate', '--width', '12', '--height', '13']) == 2
    err = capsys.readouterr().err
    assert 'path_min' in err


def test_options_file(run_module, clean_env, tmp_path, capsys):
    opts = {
        'bounds': {'width': 12, 'height': 13},
        'path': {'min': 10, 'max': 60},
        'teleporter': {'min': 1, 'max': 1},
        'builderPool': {'managerCount': {'min': 2, 'max': 2}},
        'builder': {'turnDistance': {'min': 2, 'max': 4}},
        'generationConstraints': {'maxAttempts': 300},
        'seed': 5,
    }
    path = tmp_path / 'maze.json'
    path.write_text(json.dumps(opts))
    run_module.main(['stats', '--options', str(path)])
    data = _json_from(capsys.readouterr().out)
    assert data['seed'] == 5
    assert data['teleporter_pairs'] == 1


def test_env_file_argument(run_module, clean_env, tmp_path, capsys):
    env_file = tmp_path / '.env'
    env_file.write_text('MAZEGEN_SEED=77\n')
    run_module.main(['--env-file', str(env_file), 'stats'] + SMALL_ARGS)
    assert _json_from(capsys.readouterr().out)['seed'] == 77


def test_flag_overrides_env(run_module, clean_env, monkeypatch, capsys):
    monkeypatch.setenv('MAZEGEN_SEED', '3')
    run_module.main(['stats', '--seed', '4'] + SMALL_ARGS)
    assert _json_from(capsys.readouterr().out)['seed'] == 4
