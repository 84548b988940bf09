from __future__ import annotations

import logging
import os
from typing import List

from .aggregate import aggregate_models, sorted_casefold, union_casefold
from .cds_init import find_model_decks
from .cds_lib import parse_cds_lib
from .deck_inspect import inspect_deck
from .errors import ScanError
from .extract import ModelExtractor
from .model import ModelDeckRecord, SpectreModel, WorkspaceScanResult


logger = logging.getLogger(__name__)


def scan_workspace(workspace_root: str) -> WorkspaceScanResult:
	"""Discover libraries, model decks and models under ``workspace_root``."""
	if not workspace_root or not workspace_root.strip():
		raise ScanError("Workspace root must be provided")

	root = os.path.abspath(os.path.expanduser(workspace_root.strip()))
	warnings: List[str] = []
	logger.info("Scanning workspace %s", root)

	libraries = parse_cds_lib(root, warnings)

	extractor = ModelExtractor(root, warnings)
	records: List[ModelDeckRecord] = []
	partials: List[SpectreModel] = []
	for reference in find_model_decks(root, warnings):
		record = inspect_deck(root, reference.path, warnings, source=reference.source, section=reference.section)
		occurrences = extractor.extract(reference.path, reference.section)
		names = sorted_casefold(union_casefold(m.name for m in occurrences))
		records.append(record.model_copy(update={"models": names}))
		partials.extend(occurrences)

	models = aggregate_models(partials)
	logger.info(
		"Found %d libraries, %d model decks, %d models (%d warnings)",
		len(libraries), len(records), len(models), len(warnings),
	)
	return WorkspaceScanResult(
		workspace_root=root,
		libraries=libraries,
		model_decks=records,
		models=models,
		warnings=warnings,
	)
