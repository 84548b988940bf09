"""Name and type heuristics for discovered device models.

These tables follow common open-source PDK naming (``nfet_01v8_lvt`` and
friends). They are approximations: models from foundries with other naming
schemes may come back as Other or without a voltage domain or threshold flavor.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .model import DeviceClass


# (device class, exact type tokens, substrings), checked in order
DEVICE_CLASS_RULES: List[Tuple[DeviceClass, Tuple[str, ...], Tuple[str, ...]]] = [
	(DeviceClass.MOSCAP, (), ("moscap",)),
	(DeviceClass.NMOS, (), ("nmos", "nfet")),
	(DeviceClass.PMOS, (), ("pmos", "pfet")),
	(DeviceClass.BIPOLAR, (), ("npn", "pnp", "bjt")),
	(DeviceClass.DIODE, ("d",), ("diode",)),
	(DeviceClass.RESISTOR, ("r",), ("res",)),
	(DeviceClass.CAPACITOR, ("c",), ("cap",)),
	(DeviceClass.INDUCTOR, (), ("ind",)),
	(DeviceClass.TRANSMISSION_LINE, (), ("tline", "transmission")),
]

THRESHOLD_FLAVORS: Tuple[str, ...] = (
	"ulvt", "llvt", "slvt", "lvt", "rvt", "svt", "nvt", "hvt", "mvt",
)

# Filter words accepted by the CLI and API beyond the class names themselves
DEVICE_CLASS_ALIASES: Dict[str, DeviceClass] = {
	"nfet": DeviceClass.NMOS,
	"nch": DeviceClass.NMOS,
	"pfet": DeviceClass.PMOS,
	"pch": DeviceClass.PMOS,
	"cap": DeviceClass.CAPACITOR,
	"caps": DeviceClass.CAPACITOR,
	"capacitors": DeviceClass.CAPACITOR,
	"res": DeviceClass.RESISTOR,
	"resistors": DeviceClass.RESISTOR,
	"diodes": DeviceClass.DIODE,
	"bjt": DeviceClass.BIPOLAR,
	"ind": DeviceClass.INDUCTOR,
	"inductors": DeviceClass.INDUCTOR,
	"tline": DeviceClass.TRANSMISSION_LINE,
	"tl": DeviceClass.TRANSMISSION_LINE,
	"uncat": DeviceClass.UNKNOWN,
	"uncategorized": DeviceClass.UNKNOWN,
	"unmatched": DeviceClass.UNKNOWN,
}

_VOLTAGE_RE = re.compile(r"(?P<voltage>\d+)v(?P<frac>\d+)", re.IGNORECASE)


def classify_model_type(type_token: Optional[str]) -> DeviceClass:
	if type_token is None or not type_token.strip():
		return DeviceClass.UNKNOWN

	token = type_token.strip().lower()
	for device_class, exact, substrings in DEVICE_CLASS_RULES:
		if token in exact or any(s in token for s in substrings):
			return device_class
	return DeviceClass.OTHER


def infer_voltage_domain(name: Optional[str]) -> Optional[str]:
	"""``nfet_01v8`` -> ``1.8V``; ``g5v0`` -> ``5V``."""
	if not name or not name.strip():
		return None

	match = _VOLTAGE_RE.search(name)
	if match is None:
		return None

	whole = match.group("voltage").lstrip("0") or "0"
	frac = match.group("frac").rstrip("0")
	return f"{whole}.{frac}V" if frac else f"{whole}V"


def infer_threshold_flavor(name: Optional[str]) -> Optional[str]:
	if not name or not name.strip():
		return None

	lower = name.lower()
	for flavor in THRESHOLD_FLAVORS:
		if f"_{flavor}" in lower or lower.endswith(flavor):
			return flavor.upper()
	return None


def parse_device_class(token: str) -> Optional[DeviceClass]:
	"""Map user input such as ``nmos``, ``Resistor`` or ``res`` to a class."""
	text = token.strip().strip("/").lower()
	if not text:
		return None
	if text in DEVICE_CLASS_ALIASES:
		return DEVICE_CLASS_ALIASES[text]
	for device_class in DeviceClass:
		if device_class.value.lower() == text or device_class.name.lower() == text:
			return device_class
	guessed = classify_model_type(text)
	if guessed in (DeviceClass.OTHER, DeviceClass.UNKNOWN):
		return None
	return guessed
