from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		frozen=True,
		protected_namespaces=(),
	)


class DeviceClass(str, Enum):
	UNKNOWN = "Unknown"
	NMOS = "Nmos"
	PMOS = "Pmos"
	BIPOLAR = "Bipolar"
	DIODE = "Diode"
	RESISTOR = "Resistor"
	CAPACITOR = "Capacitor"
	INDUCTOR = "Inductor"
	MOSCAP = "Moscap"
	TRANSMISSION_LINE = "TransmissionLine"
	OTHER = "Other"


class WorkspaceLibrary(_Record):
	name: str
	path: str


class DeckReference(_Record):
	"""A model deck named by a bootstrap file."""

	path: str
	source: str
	section: Optional[str] = None


class ModelDeckRecord(_Record):
	deck_path: str
	source: Optional[str] = None
	section: Optional[str] = None
	sections: List[str] = []
	includes: List[str] = []
	models: List[str] = []


class SpectreModel(_Record):
	name: str
	model_type: str = ""
	device_class: DeviceClass = DeviceClass.UNKNOWN
	voltage_domain: Optional[str] = None
	threshold_flavor: Optional[str] = None
	corners: List[str] = []
	corner_details: List[str] = []
	sections: List[str] = []
	source_files: List[str] = []
	decks: List[str] = []


class WorkspaceScanResult(_Record):
	workspace_root: str
	libraries: List[WorkspaceLibrary] = []
	model_decks: List[ModelDeckRecord] = []
	models: List[SpectreModel] = []
	warnings: List[str] = []


class CliConfig(_Record):
	pdk_root: Optional[str] = None
