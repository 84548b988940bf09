from __future__ import annotations

import logging
import os
from typing import List, Optional

from .aggregate import union_casefold
from .directives import (
	END_SECTION_RE,
	INCLUDE_RE,
	LIB_RE,
	SECTION_RE,
	extract_directive_argument,
	looks_like_path,
	normalize_line,
	section_argument,
	split_arguments,
	strip_keyword,
)
from .model import ModelDeckRecord
from .paths import normalize_workspace_path


logger = logging.getLogger(__name__)


def _annotate(path: str, section: Optional[str]) -> str:
	return f"{path};{section}" if section else path


def inspect_deck(
	workspace_root: str,
	deck_path: str,
	warnings: Optional[List[str]] = None,
	source: Optional[str] = None,
	section: Optional[str] = None,
) -> ModelDeckRecord:
	"""Shallow pass over one deck: its section names and direct includes.

	Included files are resolved but never opened.
	"""
	if warnings is None:
		warnings = []
	deck = os.path.abspath(deck_path)
	sections: List[str] = []
	includes: List[str] = []

	if not os.path.isfile(deck):
		warnings.append(f"Model deck '{deck}' does not exist.")
		return ModelDeckRecord(deck_path=deck, source=source, section=section)

	directory = os.path.dirname(deck)
	try:
		with open(deck, "r", encoding="utf-8", errors="replace") as fh:
			for raw_line in fh:
				line = normalize_line(raw_line)
				if line is None:
					continue

				if SECTION_RE.match(line):
					label = extract_directive_argument(strip_keyword(line, SECTION_RE))
					if label:
						sections.append(label)
				elif END_SECTION_RE.match(line):
					continue
				elif INCLUDE_RE.match(line):
					args = split_arguments(strip_keyword(line, INCLUDE_RE))
					if not args:
						continue
					path = normalize_workspace_path(args[0], workspace_root, directory)
					if path is not None:
						includes.append(_annotate(path, section_argument(args[1:])))
				elif LIB_RE.match(line):
					args = split_arguments(strip_keyword(line, LIB_RE))
					if len(args) >= 2 and looks_like_path(args[0]):
						path = normalize_workspace_path(args[0], workspace_root, directory)
						if path is not None:
							includes.append(_annotate(path, args[1]))
	except OSError as e:
		warnings.append(f"Failed to inspect '{deck}': {e}")

	logger.debug("Inspected %s: %d sections, %d includes", deck, len(sections), len(includes))
	return ModelDeckRecord(
		deck_path=deck,
		source=source,
		section=section,
		sections=union_casefold(sections),
		includes=union_casefold(includes),
	)
