"""Scoping frames tracked while walking model decks.

A deck position is enclosed by a stack of frames: ``.lib <corner>`` blocks,
``section <label>`` blocks and includes restricted to a corner section. The
stack is a small pushdown automaton whose only pop operation is
``pop_matching(kind)``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional


_CORNER_SEPARATOR_RE = re.compile(r"(?<=.)[_-]")


@dataclass(frozen=True)
class CornerInfo:
	original: str
	primary: str
	detail: Optional[str] = None


def parse_corner_info(label: Optional[str]) -> Optional[CornerInfo]:
	"""Split ``tt_hot`` / ``ff-1p8`` into primary corner and detail."""
	if label is None or not label.strip():
		return None
	trimmed = label.strip().strip("\"'")
	if not trimmed:
		return None

	normalized = trimmed.lower()
	match = _CORNER_SEPARATOR_RE.search(normalized)
	if match is None:
		return CornerInfo(original=trimmed, primary=normalized)

	primary = normalized[:match.start()]
	detail = normalized[match.end():].strip() or None
	return CornerInfo(original=trimmed, primary=primary, detail=detail)


class FrameKind(str, Enum):
	LIBRARY_BLOCK = "LibraryBlock"
	SECTION_BLOCK = "SectionBlock"
	INCLUDE_SECTION = "IncludeWithSection"


@dataclass(frozen=True)
class ScopeFrame:
	kind: FrameKind
	corner: CornerInfo


class FrameStack:
	def __init__(self) -> None:
		self._frames: List[ScopeFrame] = []

	def __len__(self) -> int:
		return len(self._frames)

	def __iter__(self) -> Iterator[ScopeFrame]:
		# Outermost first
		return iter(list(self._frames))

	def push(self, frame: ScopeFrame) -> None:
		self._frames.append(frame)

	def pop_matching(self, kind: FrameKind, floor: int = 0) -> Optional[ScopeFrame]:
		"""Pop down to and including the innermost frame of ``kind``.

		Frames below ``floor`` are never touched. Returns the matched frame, or
		None (leaving the stack unchanged) when no frame of that kind is above
		the floor.
		"""
		for index in range(len(self._frames) - 1, max(floor, 0) - 1, -1):
			if self._frames[index].kind is kind:
				frame = self._frames[index]
				del self._frames[index:]
				return frame
		return None

	def truncate(self, depth: int) -> None:
		del self._frames[max(depth, 0):]

	def peek(self) -> Optional[ScopeFrame]:
		return self._frames[-1] if self._frames else None
