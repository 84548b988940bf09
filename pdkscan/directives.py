"""Lexical helpers shared by the deck inspector and the model extractor."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional


COMMENT_PREFIXES = ("*", "//")

INCLUDE_RE = re.compile(r"^\.?include\b", re.IGNORECASE)
LIB_RE = re.compile(r"^\.lib\b", re.IGNORECASE)
ENDL_RE = re.compile(r"^\.endl\b", re.IGNORECASE)
SECTION_RE = re.compile(r"^section\b", re.IGNORECASE)
END_SECTION_RE = re.compile(r"^endsection\b", re.IGNORECASE)
MODEL_RE = re.compile(r"^\.?model\b", re.IGNORECASE)

# "// note" after the tokens; "//server/path" is a path, not a comment
_TRAILING_COMMENT_RE = re.compile(r"\s+//(?:\s.*)?$")


def normalize_line(raw_line: Optional[str]) -> Optional[str]:
	"""Trim a raw deck line; None for blank and comment lines."""
	if not raw_line:
		return None
	line = raw_line.strip()
	if not line or line.startswith(COMMENT_PREFIXES):
		return None
	line = _TRAILING_COMMENT_RE.sub("", line)
	return line or None


def split_arguments(text: Optional[str]) -> List[str]:
	"""Split on whitespace, keeping quoted spans together and dropping the quotes."""
	tokens: List[str] = []
	if not text or not text.strip():
		return tokens

	current: List[str] = []
	quote: Optional[str] = None
	for ch in text:
		if quote is not None:
			if ch == quote:
				quote = None
			else:
				current.append(ch)
		elif ch.isspace():
			if current:
				tokens.append("".join(current))
				current = []
		elif ch in "\"'":
			quote = ch
		else:
			current.append(ch)

	if current:
		tokens.append("".join(current))
	return tokens


def strip_keyword(line: str, pattern: re.Pattern) -> str:
	match = pattern.match(line)
	if not match:
		return line
	return line[match.end():].strip()


def extract_directive_argument(value: str) -> str:
	# "section tt", "section = tt" and "section "tt"" all yield "tt"
	trimmed = value.strip()
	if trimmed.startswith("="):
		trimmed = trimmed[1:].strip()
	if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in "\"'":
		trimmed = trimmed[1:-1]
	parts = trimmed.split()
	return parts[0] if parts else ""


def extract_assignment_value(token: str) -> Optional[str]:
	index = token.find("=")
	if index < 0:
		return None
	return token[index + 1:].strip().strip("\"'")


def section_argument(tokens: Iterable[str]) -> Optional[str]:
	"""Find the label of a ``section=<label>`` argument in include tokens."""
	args = list(tokens)
	for i, token in enumerate(args):
		if token.lower().startswith("section"):
			value = extract_assignment_value(token)
			if not value:
				# "section = tt" or "section =tt" split into several tokens
				rest = args[i + 1:i + 3]
				for candidate in rest:
					candidate = candidate.lstrip("=").strip("\"'")
					if candidate:
						value = candidate
						break
			if value:
				return value
	return None


def normalize_identifier(value: Optional[str]) -> Optional[str]:
	if value is None or not value.strip():
		return None
	return value.strip().strip("\"'").lower() or None


def looks_like_path(token: Optional[str]) -> bool:
	if not token or not token.strip():
		return False
	return "/" in token or "\\" in token or "." in token
