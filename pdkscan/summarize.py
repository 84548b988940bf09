from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .model import DeviceClass, ModelDeckRecord, SpectreModel, WorkspaceScanResult


def format_list(values: Iterable[str], empty: str = "-") -> str:
	items = [v for v in values if v]
	return ", ".join(items) if items else empty


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
	widths = [len(h) for h in headers]
	for row in rows:
		for i, cell in enumerate(row):
			widths[i] = max(widths[i], len(cell))

	def fmt(cells: Sequence[str]) -> str:
		return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

	lines = [fmt(headers), fmt(["-" * w for w in widths])]
	lines.extend(fmt(row) for row in rows)
	return "\n".join(lines)


def summarize_scan(result: WorkspaceScanResult) -> str:
	return (
		f"Workspace {result.workspace_root}: {len(result.libraries)} libraries, "
		f"{len(result.model_decks)} model decks, {len(result.models)} models, "
		f"{len(result.warnings)} warnings"
	)


def class_summary(models: Sequence[SpectreModel], sample: int = 3) -> List[Tuple[str, str, str]]:
	"""Rows of (class, count, sample names), largest classes first, Unknown last."""
	groups: Dict[DeviceClass, List[SpectreModel]] = {}
	for m in models:
		groups.setdefault(m.device_class, []).append(m)

	ordered = sorted(
		(c for c in groups if c is not DeviceClass.UNKNOWN),
		key=lambda c: (-len(groups[c]), c.value.lower()),
	)
	if DeviceClass.UNKNOWN in groups:
		ordered.append(DeviceClass.UNKNOWN)

	rows: List[Tuple[str, str, str]] = []
	for device_class in ordered:
		members = groups[device_class]
		names = [m.name for m in members[:sample]]
		if len(members) > sample:
			names.append("...")
		rows.append((device_class.value, str(len(members)), ", ".join(names)))
	return rows


def model_rows(models: Sequence[SpectreModel], start: int = 1) -> List[Tuple[str, ...]]:
	rows = []
	for index, m in enumerate(models, start=start):
		rows.append(
			(
				str(index),
				m.name,
				m.device_class.value,
				m.voltage_domain or "-",
				m.threshold_flavor or "-",
				format_list(m.corners),
			)
		)
	return rows


def deck_rows(decks: Sequence[ModelDeckRecord]) -> List[Tuple[str, ...]]:
	return [
		(
			str(index),
			os.path.basename(d.deck_path),
			str(len(d.sections)),
			str(len(d.includes)),
			str(len(d.models)),
		)
		for index, d in enumerate(decks, start=1)
	]


def summarize_model(m: SpectreModel) -> str:
	rows = [
		("Name", m.name),
		("Model Type", m.model_type or "-"),
		("Class", m.device_class.value),
		("Threshold", m.threshold_flavor or "-"),
		("Voltage", m.voltage_domain or "-"),
		("Corners", format_list(m.corners)),
		("Corner Details", format_list(m.corner_details)),
		("Sections", format_list(m.sections)),
		("Decks", format_list(os.path.basename(d) or d for d in m.decks)),
		("Sources", format_list(m.source_files)),
	]
	return format_table(("Field", "Value"), rows)


def summarize_deck(d: ModelDeckRecord) -> str:
	rows = [
		("Deck", d.deck_path),
		("Source", d.source or "-"),
		("Section", d.section or "-"),
		("Sections", format_list(d.sections)),
		("Includes", format_list(d.includes)),
		("Models", format_list(d.models)),
	]
	return format_table(("Field", "Value"), rows)


def find_by_index_or_name(items: Sequence, key: str, name_of) -> Optional[object]:
	"""Resolve a 1-based index, an exact name or a name substring."""
	if key.isdigit():
		index = int(key) - 1
		return items[index] if 0 <= index < len(items) else None
	lowered = key.casefold()
	for item in items:
		if name_of(item).casefold() == lowered:
			return item
	for item in items:
		if lowered in name_of(item).casefold():
			return item
	return None
