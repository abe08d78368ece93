import io
import os

import pytest

from envfile import loader
from envfile.errors import EnvVarError, IoError
from envfile.loader import (
    dotenv,
    dotenv_iter,
    dotenv_override,
    from_filename,
    from_filename_iter,
    from_filename_override,
    from_path,
    from_path_iter,
    from_path_override,
    from_read,
    from_read_iter,
    from_read_override,
    var,
    vars,
)

DEFAULT_TEXT = "TESTKEY=test_val\nTESTKEY=test_val_overridden\nEXISTING=from_file"

TOUCHED_KEYS = [
    "TESTKEY",
    "EXISTING",
    "KEY",
    "KEY1",
    "KEY_U",
    "ZZZ",
    "SUBSTITUTION_FOR_STRONG_QUOTES",
    "SUBSTITUTION_FOR_WEAK_QUOTES",
    "SUBSTITUTION_WITHOUT_QUOTES",
]


@pytest.fixture
def env_dir(tmp_path, monkeypatch):
    """Return a function writing a .env into a fresh current directory."""
    saved = dict(os.environ)
    for key in TOUCHED_KEYS:
        os.environ.pop(key, None)
    loader._load_once.cache_clear()
    monkeypatch.chdir(tmp_path)

    def write(text=DEFAULT_TEXT):
        os.environ["EXISTING"] = "from_env"
        (tmp_path / ".env").write_text(text, encoding="utf-8")
        return tmp_path

    yield write
    loader._load_once.cache_clear()
    os.environ.clear()
    os.environ.update(saved)


def test_default_location(env_dir):
    directory = env_dir()
    path = dotenv()
    assert path.samefile(directory / ".env")
    assert os.environ["TESTKEY"] == "test_val"
    assert os.environ["EXISTING"] == "from_env"


def test_default_location_override(env_dir):
    directory = env_dir()
    path = dotenv_override()
    assert path.samefile(directory / ".env")
    assert os.environ["TESTKEY"] == "test_val_overridden"
    assert os.environ["EXISTING"] == "from_file"


def test_child_dir_default_location(env_dir, monkeypatch):
    directory = env_dir()
    (directory / "child").mkdir()
    monkeypatch.chdir(directory / "child")
    path = dotenv()
    assert path.samefile(directory / ".env")
    assert os.environ["TESTKEY"] == "test_val"


def test_dotenv_iter(env_dir):
    env_dir()
    pairs = dotenv_iter()
    assert "TESTKEY" not in os.environ
    assert pairs.load() is None
    assert os.environ["TESTKEY"] == "test_val"


def test_from_filename_iter(env_dir):
    env_dir()
    pairs = from_filename_iter(".env")
    assert "TESTKEY" not in os.environ
    assert pairs.load() is None
    assert os.environ["TESTKEY"] == "test_val"


def test_from_filename_override(env_dir):
    directory = env_dir()
    path = from_filename_override(".env")
    assert path.samefile(directory / ".env")
    assert os.environ["TESTKEY"] == "test_val_overridden"
    assert os.environ["EXISTING"] == "from_file"


def test_from_filename(env_dir):
    directory = env_dir()
    path = from_filename(".env")
    assert path.samefile(directory / ".env")
    assert os.environ["TESTKEY"] == "test_val"
    assert os.environ["EXISTING"] == "from_env"


def test_from_path_iter(env_dir):
    directory = env_dir()
    pairs = from_path_iter(directory / ".env")
    assert "TESTKEY" not in os.environ
    assert pairs.load() is None
    assert os.environ["TESTKEY"] == "test_val"


def test_from_path_override(env_dir):
    directory = env_dir()
    assert from_path_override(directory / ".env") is None
    assert os.environ["TESTKEY"] == "test_val_overridden"
    assert os.environ["EXISTING"] == "from_file"


def test_from_path(env_dir):
    directory = env_dir()
    assert from_path(directory / ".env") is None
    assert os.environ["TESTKEY"] == "test_val"
    assert os.environ["EXISTING"] == "from_env"


def test_from_path_ignores_bom(env_dir):
    directory = env_dir("\ufeffTESTKEY=test_val")
    assert from_path(directory / ".env") is None
    assert os.environ["TESTKEY"] == "test_val"


def test_from_path_missing(tmp_path):
    with pytest.raises(IoError) as info:
        from_path(tmp_path / "missing.env")
    assert info.value.not_found()


def test_from_read_override(env_dir):
    env_dir()
    with open(".env", "rb") as handle:
        assert from_read_override(handle) is None
    assert os.environ["TESTKEY"] == "test_val_overridden"
    assert os.environ["EXISTING"] == "from_file"


def test_from_read(env_dir):
    env_dir()
    with open(".env", "rb") as handle:
        assert from_read(handle) is None
    assert os.environ["TESTKEY"] == "test_val"
    assert os.environ["EXISTING"] == "from_env"


def test_from_read_text_stream(env_dir):
    env_dir()
    assert from_read(io.StringIO("TESTKEY=from_text\n")) is None
    assert os.environ["TESTKEY"] == "from_text"


def test_from_read_iter():
    pairs = from_read_iter(io.BytesIO(b"A=1\nexport B='two'\n"))
    assert list(pairs) == [("A", "1"), ("B", "two")]


def test_var(env_dir):
    env_dir()
    assert var("TESTKEY") == "test_val"


def test_var_missing(env_dir):
    env_dir()
    with pytest.raises(EnvVarError) as info:
        var("ZZZ")
    assert info.value.key == "ZZZ"
    assert not info.value.not_unicode


def test_vars(env_dir):
    env_dir()
    snapshot = dict(vars())
    assert snapshot["TESTKEY"] == "test_val"


def test_variable_substitutions(env_dir):
    os.environ["KEY"] = "value"
    os.environ["KEY1"] = "value1"
    common = ">>".join(
        ["$ZZZ", "$KEY", "$KEY1", "${KEY}1", "$KEY_U", "${KEY_U}", "\\$KEY"]
    )
    env_dir(
        "\nKEY1=new_value1\nKEY_U=$KEY+valueU\n\n"
        f"SUBSTITUTION_FOR_STRONG_QUOTES='{common}'\n"
        f'SUBSTITUTION_FOR_WEAK_QUOTES="{common}"\n'
        f"SUBSTITUTION_WITHOUT_QUOTES={common}\n"
    )
    expected = ">>".join(
        ["", "value", "value1", "value1", "value_U", "value+valueU", "$KEY"]
    )
    assert var("KEY") == "value"
    assert var("KEY1") == "value1"
    assert var("KEY_U") == "value+valueU"
    assert var("SUBSTITUTION_FOR_STRONG_QUOTES") == common
    assert var("SUBSTITUTION_FOR_WEAK_QUOTES") == expected
    assert var("SUBSTITUTION_WITHOUT_QUOTES") == expected