from unittest import mock

import pytest

from clikit.altsrc.loaders import (
    load_data_from,
    new_toml_source_from_file,
    new_toml_source_from_flag_func,
    new_yaml_source_from_file,
    new_yaml_source_from_flag_func,
)


class _FakeContext:
    def __init__(self, values):
        self._values = values

    def is_set(self, name):
        return name in self._values

    def string(self, name):
        return self._values.get(name, "")


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    return str(path)


def test_load_data_from_local_file(tmp_path):
    path = _write(tmp_path, "data.txt", "hello")
    assert load_data_from(path) == b"hello"


def test_load_data_from_relative_path(tmp_path, monkeypatch):
    _write(tmp_path, "current.yaml", "test: 15")
    monkeypatch.chdir(tmp_path)
    assert load_data_from("current.yaml") == b"test: 15"


def test_load_data_from_missing_file(tmp_path):
    missing = str(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError, match="because it does not exist"):
        load_data_from(missing)


def test_load_data_from_unsupported_scheme():
    with pytest.raises(ValueError, match="is unsupported"):
        load_data_from("ftp://example.com/config.yaml")


def test_load_data_from_empty_path():
    with pytest.raises(ValueError, match="unable to determine how to load"):
        load_data_from("")


@mock.patch("urllib.request.urlopen")
def test_load_data_from_http(urlopen):
    urlopen.return_value.__enter__.return_value.read.return_value = b"test: 3"
    assert load_data_from("http://example.com/config.yaml") == b"test: 3"
    urlopen.assert_called_once_with("http://example.com/config.yaml")


def test_yaml_simple_value(tmp_path):
    source = new_yaml_source_from_file(_write(tmp_path, "current.yaml", "test: 15"))
    assert source.int("test") == 15


def test_yaml_nested_value(tmp_path):
    source = new_yaml_source_from_file(_write(tmp_path, "current.yaml", "top:\n  test: 15"))
    assert source.int("top.test") == 15


def test_yaml_source_records_file(tmp_path):
    path = _write(tmp_path, "current.yaml", "name: bob")
    source = new_yaml_source_from_file(path)
    assert source.source() == path
    assert source.string("name") == "bob"


def test_yaml_empty_document(tmp_path):
    source = new_yaml_source_from_file(_write(tmp_path, "empty.yaml", ""))
    assert source.int("test") == 0


def test_yaml_non_mapping_is_error(tmp_path):
    path = _write(tmp_path, "list.yaml", "- 1\n- 2\n")
    with pytest.raises(ValueError, match="Unable to load Yaml file"):
        new_yaml_source_from_file(path)


def test_yaml_missing_file_is_wrapped(tmp_path):
    with pytest.raises(ValueError, match="Unable to load Yaml file"):
        new_yaml_source_from_file(str(tmp_path / "missing.yaml"))


def test_yaml_duration_string(tmp_path):
    source = new_yaml_source_from_file(_write(tmp_path, "d.yaml", "wait: 1m"))
    assert source.duration("wait").total_seconds() == 60


def test_yaml_flag_func_loads_when_set(tmp_path):
    path = _write(tmp_path, "current.yaml", "test: 15")
    create = new_yaml_source_from_flag_func("load")
    source = create(_FakeContext({"load": path}))
    assert source.int("test") == 15


def test_yaml_flag_func_default_when_unset():
    create = new_yaml_source_from_flag_func("load")
    source = create(_FakeContext({}))
    assert source.source() == ""
    assert source.int("test") == 0


def test_toml_simple_value(tmp_path):
    source = new_toml_source_from_file(_write(tmp_path, "current.toml", "test = 15"))
    assert source.int("test") == 15


def test_toml_nested_value(tmp_path):
    source = new_toml_source_from_file(_write(tmp_path, "current.toml", "[top]\ntest = 15"))
    assert source.int("top.test") == 15


def test_toml_nested_indented_value(tmp_path):
    source = new_toml_source_from_file(_write(tmp_path, "current.toml", "[top]\n  test = 15"))
    assert source.int("top.test") == 15


def test_toml_types(tmp_path):
    content = 'ratio = 1.5\nflag = true\nnames = ["a", "b"]\nwho = "x"\n'
    source = new_toml_source_from_file(_write(tmp_path, "t.toml", content))
    assert source.float64("ratio") == 1.5
    assert source.bool("flag") is True
    assert source.string_slice("names") == ["a", "b"]
    assert source.string("who") == "x"


def test_toml_datetime_unsupported(tmp_path):
    path = _write(tmp_path, "t.toml", "when = 1979-05-27T07:32:00Z")
    with pytest.raises(ValueError, match="Unsupported: type"):
        new_toml_source_from_file(path)


def test_toml_invalid_syntax(tmp_path):
    path = _write(tmp_path, "bad.toml", "test = = 1")
    with pytest.raises(ValueError, match="Unable to load TOML file"):
        new_toml_source_from_file(path)


def test_toml_flag_func_loads_when_set(tmp_path):
    path = _write(tmp_path, "current.toml", "test = 15")
    create = new_toml_source_from_flag_func("load")
    assert create(_FakeContext({"load": path})).int("test") == 15


def test_toml_flag_func_default_when_unset():
    create = new_toml_source_from_flag_func("load")
    source = create(_FakeContext({"other": "x"}))
    assert source.source() == ""
    assert source.string("test") == ""