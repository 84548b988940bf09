"""Deep, scope-aware extraction of model definitions from model decks.

The extractor walks a deck and every file it includes depth-first. While
walking it keeps a ``FrameStack`` of the library/section/include scopes that
enclose the current line, and emits one partial ``SpectreModel`` per model
directive, attributed with the corners and sections of those scopes. Partial
records are merged by ``aggregate.aggregate_models``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .aggregate import aggregate_models, union_casefold
from .classify import classify_model_type, infer_threshold_flavor, infer_voltage_domain
from .directives import (
	END_SECTION_RE,
	ENDL_RE,
	INCLUDE_RE,
	LIB_RE,
	MODEL_RE,
	SECTION_RE,
	extract_directive_argument,
	looks_like_path,
	normalize_identifier,
	normalize_line,
	section_argument,
	split_arguments,
	strip_keyword,
)
from .errors import ScanError
from .frames import FrameKind, FrameStack, ScopeFrame, parse_corner_info
from .model import SpectreModel
from .paths import normalize_workspace_path, path_key


logger = logging.getLogger(__name__)

VisitKey = Tuple[str, str]


@dataclass
class _OpenScope:
	label: Optional[str]
	kind: FrameKind
	frame_pushed: bool
	# Frame stack depth when the scope opened
	depth: int


@dataclass
class _Traversal:
	deck: str
	frames: FrameStack = field(default_factory=FrameStack)
	visited: Set[VisitKey] = field(default_factory=set)
	models: List[SpectreModel] = field(default_factory=list)


def _include_scope(label: Optional[str]) -> Tuple[Optional[ScopeFrame], Optional[str]]:
	info = parse_corner_info(label)
	if info is None:
		return None, None
	return ScopeFrame(FrameKind.INCLUDE_SECTION, info), normalize_identifier(info.original)


def _in_scope(section_filter: Optional[str], scopes: List[_OpenScope]) -> bool:
	if not section_filter:
		return True
	labels = [s.label for s in scopes if s.label]
	if not labels:
		return True
	return section_filter in labels


class ModelExtractor:
	def __init__(self, workspace_root: str, warnings: Optional[List[str]] = None) -> None:
		if not workspace_root or not workspace_root.strip():
			raise ScanError("Workspace root must be provided")
		self.workspace_root = os.path.abspath(workspace_root)
		self.warnings: List[str] = warnings if warnings is not None else []

	def extract(self, deck_path: str, section: Optional[str] = None) -> List[SpectreModel]:
		"""Return one partial record per model directive reachable from ``deck_path``.

		``section`` restricts the root deck the same way ``include ... section=``
		restricts an included file.
		"""
		if not deck_path or not deck_path.strip():
			raise ScanError("Deck path must be provided")

		deck = os.path.abspath(deck_path)
		state = _Traversal(deck=deck)
		frame, section_filter = _include_scope(section)
		self._visit(state, deck, frame, section_filter)
		logger.debug("Extracted %d model occurrences from %s", len(state.models), deck)
		return state.models

	def _warn(self, message: str) -> None:
		logger.debug("warning: %s", message)
		self.warnings.append(message)

	def _visit(
		self,
		state: _Traversal,
		file_path: str,
		include_frame: Optional[ScopeFrame],
		section_filter: Optional[str],
	) -> None:
		path = os.path.abspath(file_path)
		key = (path_key(path), section_filter or "")
		if key in state.visited:
			logger.debug("Skipping already visited %s (section=%s)", path, section_filter)
			return
		state.visited.add(key)

		if not os.path.isfile(path):
			self._warn(f"Model include '{path}' does not exist.")
			return

		entry_depth = len(state.frames)
		if include_frame is not None:
			state.frames.push(include_frame)
		floor = len(state.frames)
		scopes: List[_OpenScope] = []
		directory = os.path.dirname(path)

		try:
			with open(path, "r", encoding="utf-8", errors="replace") as fh:
				for raw_line in fh:
					line = normalize_line(raw_line)
					if line is None:
						continue
					self._dispatch(state, line, path, directory, section_filter, scopes, floor)
		except OSError as e:
			self._warn(f"Failed to read '{path}': {e}")
		finally:
			# Blocks left open by this file end with it
			state.frames.truncate(entry_depth)

	def _dispatch(
		self,
		state: _Traversal,
		line: str,
		path: str,
		directory: str,
		section_filter: Optional[str],
		scopes: List[_OpenScope],
		floor: int,
	) -> None:
		if LIB_RE.match(line):
			self._handle_lib(state, line, directory, section_filter, scopes)
		elif ENDL_RE.match(line):
			self._close_scope(state, scopes, FrameKind.LIBRARY_BLOCK, floor)
		elif SECTION_RE.match(line):
			label = extract_directive_argument(strip_keyword(line, SECTION_RE))
			info = parse_corner_info(label)
			depth = len(state.frames)
			if info is not None:
				state.frames.push(ScopeFrame(FrameKind.SECTION_BLOCK, info))
			scopes.append(_OpenScope(normalize_identifier(label), FrameKind.SECTION_BLOCK, info is not None, depth))
		elif END_SECTION_RE.match(line):
			self._close_scope(state, scopes, FrameKind.SECTION_BLOCK, floor)
		elif INCLUDE_RE.match(line):
			if _in_scope(section_filter, scopes):
				self._handle_include(state, line, directory)
		elif MODEL_RE.match(line):
			if _in_scope(section_filter, scopes):
				self._handle_model(state, line, path, scopes)

	def _close_scope(
		self,
		state: _Traversal,
		scopes: List[_OpenScope],
		kind: FrameKind,
		floor: int,
	) -> None:
		for index in range(len(scopes) - 1, -1, -1):
			if scopes[index].kind is kind:
				closing = scopes[index]
				del scopes[index:]
				if closing.frame_pushed:
					state.frames.pop_matching(kind, floor)
				# Frames of unclosed inner scopes go with it
				state.frames.truncate(max(closing.depth, floor))
				return

	def _handle_lib(
		self,
		state: _Traversal,
		line: str,
		directory: str,
		section_filter: Optional[str],
		scopes: List[_OpenScope],
	) -> None:
		args = split_arguments(strip_keyword(line, LIB_RE))
		if not args:
			return

		if len(args) >= 2 and looks_like_path(args[0]):
			if not _in_scope(section_filter, scopes):
				return
			target = normalize_workspace_path(args[0], self.workspace_root, directory)
			if target is None:
				self._warn(f"Unable to resolve library path '{args[0]}'.")
				return
			frame, child_filter = _include_scope(args[1])
			self._visit(state, target, frame, child_filter)
			return

		info = parse_corner_info(args[0])
		depth = len(state.frames)
		if info is not None:
			state.frames.push(ScopeFrame(FrameKind.LIBRARY_BLOCK, info))
		scopes.append(_OpenScope(normalize_identifier(args[0]), FrameKind.LIBRARY_BLOCK, info is not None, depth))

	def _handle_include(self, state: _Traversal, line: str, directory: str) -> None:
		args = split_arguments(strip_keyword(line, INCLUDE_RE))
		if not args:
			return

		target = normalize_workspace_path(args[0], self.workspace_root, directory)
		if target is None:
			self._warn(f"Unable to resolve include path '{args[0]}'.")
			return

		frame, child_filter = _include_scope(section_argument(args[1:]))
		self._visit(state, target, frame, child_filter)

	def _handle_model(
		self,
		state: _Traversal,
		line: str,
		path: str,
		scopes: List[_OpenScope],
	) -> None:
		args = split_arguments(strip_keyword(line, MODEL_RE))
		if len(args) < 2:
			logger.debug("Ignoring incomplete model directive in %s: %r", path, line)
			return

		name = args[0]
		# SPICE allows ".model name nmos(level=54 ...)"
		model_type = args[1].split("(", 1)[0]

		corners: List[str] = []
		details: List[str] = []
		sections: List[str] = []
		for frame in state.frames:
			corners.append(frame.corner.primary)
			if frame.corner.detail:
				details.append(frame.corner.detail)
			sections.append(frame.corner.original)
		sections.extend(s.label for s in scopes if s.kind is FrameKind.SECTION_BLOCK and s.label)

		state.models.append(
			SpectreModel(
				name=name,
				model_type=model_type,
				device_class=classify_model_type(model_type),
				voltage_domain=infer_voltage_domain(name),
				threshold_flavor=infer_threshold_flavor(name),
				corners=union_casefold(corners),
				corner_details=union_casefold(details),
				sections=union_casefold(sections),
				source_files=[path],
				decks=[state.deck],
			)
		)


def extract_deck_models(
	workspace_root: str,
	deck_path: str,
	section: Optional[str] = None,
	warnings: Optional[List[str]] = None,
) -> List[SpectreModel]:
	"""Extract and aggregate the models of a single deck."""
	extractor = ModelExtractor(workspace_root, warnings)
	return aggregate_models(extractor.extract(deck_path, section))
