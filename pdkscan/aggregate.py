"""Fold per-occurrence model records into one canonical record per name."""

from __future__ import annotations

from functools import reduce
from typing import Dict, Iterable, List, Sequence

from .model import DeviceClass, SpectreModel


def union_casefold(*groups: Iterable[str]) -> List[str]:
	"""Order-preserving union, case-insensitive, skipping blanks."""
	seen = set()
	result: List[str] = []
	for group in groups:
		for value in group:
			if not value or not value.strip():
				continue
			key = value.casefold()
			if key in seen:
				continue
			seen.add(key)
			result.append(value)
	return result


def sorted_casefold(values: Sequence[str]) -> List[str]:
	return sorted(values, key=lambda v: (v.casefold(), v))


def merge_models(first: SpectreModel, second: SpectreModel) -> SpectreModel:
	"""Associative merge of two records sharing a name; ``first`` takes precedence."""
	device_class = first.device_class
	if device_class is DeviceClass.UNKNOWN:
		device_class = second.device_class

	return SpectreModel(
		name=first.name,
		model_type=first.model_type or second.model_type,
		device_class=device_class,
		voltage_domain=first.voltage_domain or second.voltage_domain,
		threshold_flavor=first.threshold_flavor or second.threshold_flavor,
		corners=union_casefold(first.corners, second.corners),
		corner_details=union_casefold(first.corner_details, second.corner_details),
		sections=union_casefold(first.sections, second.sections),
		source_files=union_casefold(first.source_files, second.source_files),
		decks=union_casefold(first.decks, second.decks),
	)


def _finalize(model: SpectreModel) -> SpectreModel:
	return model.model_copy(
		update={
			"corners": sorted_casefold(union_casefold(model.corners)),
			"corner_details": sorted_casefold(union_casefold(model.corner_details)),
			"sections": sorted_casefold(union_casefold(model.sections)),
			"source_files": sorted_casefold(union_casefold(model.source_files)),
			"decks": sorted_casefold(union_casefold(model.decks)),
		}
	)


def aggregate_models(partials: Iterable[SpectreModel]) -> List[SpectreModel]:
	groups: Dict[str, List[SpectreModel]] = {}
	for model in partials:
		groups.setdefault(model.name.casefold(), []).append(model)

	merged = [_finalize(reduce(merge_models, group)) for group in groups.values()]
	return sorted(merged, key=lambda m: (m.name.casefold(), m.name))
