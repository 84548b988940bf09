from __future__ import annotations

import logging
import os
import re
from typing import List, Optional, Tuple

from .directives import split_arguments
from .model import DeckReference
from .paths import normalize_workspace_path, path_key


logger = logging.getLogger(__name__)

BOOTSTRAP_NAMES = (".cdsinit", "cdsinit")
SITE_ENV_VARS = ("CDS_SITE", "CDS_HOME")

MODEL_FILES_RE = re.compile(
	r"envSetVal\(\s*\"spectre\.envOpts\"\s+\"modelFiles\"\s+['`]string\s+"
	r"(?P<value>\"[^\"]*\"|\([^)]*\)|[^\s)]+)",
	re.IGNORECASE,
)


def candidate_bootstrap_files(workspace_root: str) -> List[str]:
	"""Existing init files that may name model decks, in lookup order."""
	paths = [os.path.join(workspace_root, name) for name in BOOTSTRAP_NAMES]
	for var in SITE_ENV_VARS:
		value = os.environ.get(var)
		if value:
			paths.append(os.path.join(value, ".cdsinit"))

	candidates: List[str] = []
	seen = set()
	for path in paths:
		if not os.path.isfile(path):
			continue
		full = os.path.abspath(path)
		if path_key(full) in seen:
			continue
		seen.add(path_key(full))
		candidates.append(full)
	return candidates


def split_section_suffix(token: str) -> Tuple[str, Optional[str]]:
	"""``models.scs;tt`` -> (``models.scs``, ``tt``)."""
	path, sep, section = token.partition(";")
	section = section.strip() if sep else ""
	return path.strip(), section or None


def parse_model_files_value(value: str) -> List[str]:
	text = value.strip()
	if text.startswith("(") and text.endswith(")"):
		text = text[1:-1]
	elif len(text) >= 2 and text[0] == text[-1] == '"':
		text = text[1:-1]
	return split_arguments(text)


def extract_model_paths(
	workspace_root: str,
	file_path: str,
	warnings: List[str],
) -> List[DeckReference]:
	references: List[DeckReference] = []
	directory = os.path.dirname(file_path)
	try:
		with open(file_path, "r", encoding="utf-8", errors="replace") as fh:
			for line in fh:
				match = MODEL_FILES_RE.search(line)
				if not match:
					continue
				for token in parse_model_files_value(match.group("value")):
					raw_path, section = split_section_suffix(token)
					path = normalize_workspace_path(raw_path, workspace_root, directory)
					if path is not None:
						references.append(DeckReference(path=path, source=file_path, section=section))
	except OSError as e:
		warnings.append(f"Failed to parse {file_path}: {e}")
	return references


def find_model_decks(workspace_root: str, warnings: Optional[List[str]] = None) -> List[DeckReference]:
	"""Locate the top-level model decks named by the workspace's bootstrap files."""
	if warnings is None:
		warnings = []
	root = os.path.abspath(workspace_root)

	decks: List[DeckReference] = []
	seen = set()
	for bootstrap in candidate_bootstrap_files(root):
		for reference in extract_model_paths(root, bootstrap, warnings):
			if not os.path.isfile(reference.path):
				warnings.append(f"Model deck '{reference.path}' referenced by {bootstrap} does not exist.")
				continue
			key = reference.path.casefold()
			if key in seen:
				continue
			seen.add(key)
			decks.append(reference)

	logger.debug("Found %d model decks under %s", len(decks), root)
	return decks
