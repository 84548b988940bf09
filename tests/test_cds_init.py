import os

from pdkscan.cds_init import find_model_decks, parse_model_files_value, split_section_suffix

from conftest import write


def test_split_section_suffix():
	assert split_section_suffix("models/top.scs;tt") == ("models/top.scs", "tt")
	assert split_section_suffix("models/top.scs") == ("models/top.scs", None)


def test_parse_model_files_value_forms():
	assert parse_model_files_value('"a.scs"') == ["a.scs"]
	assert parse_model_files_value('("a.scs;tt" b.scs \'c d.scs\')') == ["a.scs;tt", "b.scs", "c d.scs"]


def test_find_model_decks_from_cdsinit(tmp_path):
	write(tmp_path / "models" / "top.scs", "")
	write(tmp_path / "models" / "extra.scs", "")
	write(
		tmp_path / ".cdsinit",
		'envSetVal("spectre.envOpts" "modelFiles" \'string "models/top.scs;tt")\n'
		'envSetVal("spectre.envOpts" "modelFiles" \'string ("$WORK_DIR/models/extra.scs" "models/top.scs" missing.scs))\n',
	)

	warnings = []
	decks = find_model_decks(str(tmp_path), warnings)

	assert [d.path for d in decks] == [
		os.path.join(str(tmp_path), "models", "top.scs"),
		os.path.join(str(tmp_path), "models", "extra.scs"),
	]
	assert decks[0].section == "tt"
	assert decks[0].source == os.path.join(str(tmp_path), ".cdsinit")
	assert len(warnings) == 1 and "missing.scs" in warnings[0]


def test_site_bootstrap_is_consulted(tmp_path, monkeypatch):
	site = tmp_path / "site"
	write(site / "decks" / "site.scs", "")
	write(site / ".cdsinit", 'envSetVal("spectre.envOpts" "modelFiles" \'string "decks/site.scs")\n')
	monkeypatch.setenv("CDS_SITE", str(site))

	decks = find_model_decks(str(tmp_path / "ws"), [])
	assert [d.path for d in decks] == [os.path.join(str(site), "decks", "site.scs")]


def test_no_bootstrap_files(tmp_path):
	warnings = []
	assert find_model_decks(str(tmp_path), warnings) == []
	assert warnings == []
