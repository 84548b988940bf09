import pytest


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
	monkeypatch.setenv("PDKSCAN_HOME", str(tmp_path / "state"))
	monkeypatch.delenv("CDS_SITE", raising=False)
	monkeypatch.delenv("CDS_HOME", raising=False)


def write(path, text):
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text)
	return path


def build_workspace(root):
	"""A small two-deck workspace shared by scanner, CLI and API tests."""
	write(root / "cds.lib", "DEFINE analogLib ./libs/analogLib\nDEFINE sky130 ./libs/sky130\n")
	write(
		root / ".cdsinit",
		'envSetVal("spectre.envOpts" "modelFiles" \'string ("models/tt.scs" "models/ff.scs;ff" "models/gone.scs"))\n',
	)
	write(
		root / "models" / "tt.scs",
		'section tt\n.lib "corner.scs" tt\nendsection\ninclude "devices.scs"\n',
	)
	write(
		root / "models" / "corner.scs",
		"section tt\n.model nfet_01v8 nmos\n.model m1 pmos\nendsection\nsection ff\n.model nfet_01v8 nmos\nendsection\n",
	)
	write(root / "models" / "devices.scs", "model sky130_fd_pr__res_generic_po r\ninclude devices.scs\n")
	write(
		root / "models" / "ff.scs",
		"section ff\nmodel m1 pmos\nmodel pfet_01v8_lvt pmos\nendsection\nsection ss\nmodel only_ss nmos\nendsection\n",
	)
	return root
