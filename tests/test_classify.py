import pytest

from pdkscan.classify import (
	classify_model_type,
	infer_threshold_flavor,
	infer_voltage_domain,
	parse_device_class,
)
from pdkscan.model import DeviceClass


def test_classify_model_type():
	assert classify_model_type("nmos") is DeviceClass.NMOS
	assert classify_model_type("NFET") is DeviceClass.NMOS
	assert classify_model_type("pmos") is DeviceClass.PMOS
	assert classify_model_type("npn") is DeviceClass.BIPOLAR
	assert classify_model_type("d") is DeviceClass.DIODE
	assert classify_model_type("diode") is DeviceClass.DIODE
	assert classify_model_type("r") is DeviceClass.RESISTOR
	assert classify_model_type("resistor") is DeviceClass.RESISTOR
	assert classify_model_type("c") is DeviceClass.CAPACITOR
	assert classify_model_type("mimcap") is DeviceClass.CAPACITOR
	assert classify_model_type("inductor") is DeviceClass.INDUCTOR
	assert classify_model_type("moscap") is DeviceClass.MOSCAP
	assert classify_model_type("tline") is DeviceClass.TRANSMISSION_LINE
	assert classify_model_type("bsim4") is DeviceClass.OTHER
	assert classify_model_type("") is DeviceClass.UNKNOWN


def test_infer_voltage_domain():
	assert infer_voltage_domain("sky130_fd_pr__nfet_01v8") == "1.8V"
	assert infer_voltage_domain("nfet_05v0") == "5V"
	assert infer_voltage_domain("pfet_g5v0d10v5") == "5V"
	assert infer_voltage_domain("x_00v5") == "0.5V"
	assert infer_voltage_domain("sky130_fd_pr__res_generic_po") is None


def test_infer_threshold_flavor():
	assert infer_threshold_flavor("sky130_fd_pr__nfet_01v8_lvt") == "LVT"
	assert infer_threshold_flavor("nfet_ulvt_x") == "ULVT"
	assert infer_threshold_flavor("pfethvt") == "HVT"
	assert infer_threshold_flavor("sky130_fd_pr__res_generic_po") is None


def test_parse_device_class():
	assert parse_device_class("Nmos") is DeviceClass.NMOS
	assert parse_device_class("transmission_line") is DeviceClass.TRANSMISSION_LINE
	assert parse_device_class("res") is DeviceClass.RESISTOR
	assert parse_device_class(" /pfet/ ") is DeviceClass.PMOS
	assert parse_device_class("widget") is None


@pytest.mark.parametrize(
	"token, expected",
	[
		("nch", DeviceClass.NMOS),
		("PCH", DeviceClass.PMOS),
		("tl", DeviceClass.TRANSMISSION_LINE),
		("tline", DeviceClass.TRANSMISSION_LINE),
		("bjt", DeviceClass.BIPOLAR),
		("ind", DeviceClass.INDUCTOR),
		("caps", DeviceClass.CAPACITOR),
		("uncat", DeviceClass.UNKNOWN),
		("uncategorized", DeviceClass.UNKNOWN),
		("unmatched", DeviceClass.UNKNOWN),
		("unknown", DeviceClass.UNKNOWN),
	],
)
def test_parse_device_class_aliases(token, expected):
	assert parse_device_class(token) is expected
