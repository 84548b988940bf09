import os

from pdkscan.paths import normalize_workspace_path, trim_quotes


def test_empty_tokens_resolve_to_none(tmp_path):
	assert normalize_workspace_path("", str(tmp_path)) is None
	assert normalize_workspace_path("   ", str(tmp_path)) is None
	assert normalize_workspace_path('""', str(tmp_path)) is None


def test_relative_path_joins_relative_base(tmp_path):
	base = tmp_path / "models"
	result = normalize_workspace_path('"corners/tt.scs"', str(tmp_path), str(base))
	assert result == os.path.join(str(base), "corners", "tt.scs")


def test_relative_path_falls_back_to_workspace_root(tmp_path):
	assert normalize_workspace_path("a/../b.scs", str(tmp_path)) == os.path.join(str(tmp_path), "b.scs")


def test_work_dir_placeholders(tmp_path):
	root = str(tmp_path)
	assert normalize_workspace_path("$WORK_DIR/models/top.scs", root, "/elsewhere") == os.path.join(root, "models", "top.scs")
	assert normalize_workspace_path("${WORK_DIR}/top.scs", root, "/elsewhere") == os.path.join(root, "top.scs")


def test_environment_and_home_expansion(tmp_path, monkeypatch):
	monkeypatch.setenv("PDK_ROOT", str(tmp_path / "pdk"))
	monkeypatch.setenv("HOME", str(tmp_path / "home"))
	assert normalize_workspace_path("$PDK_ROOT/libs/x.lib", "/ws") == os.path.join(str(tmp_path), "pdk", "libs", "x.lib")
	assert normalize_workspace_path("~/decks/top.scs", "/ws") == os.path.join(str(tmp_path), "home", "decks", "top.scs")


def test_absolute_path_is_canonicalized(tmp_path):
	raw = str(tmp_path) + "/x/./y/../z.scs"
	assert normalize_workspace_path(raw, "/ws", "/other") == os.path.join(str(tmp_path), "x", "z.scs")


def test_trim_quotes():
	assert trim_quotes("'a b'") == "a b"
	assert trim_quotes('"a') == "a"
	assert trim_quotes("plain") == "plain"
