"""Shell-glob matching of relative paths.

Patterns are compiled to anchored regular expressions and always tested
against forward-slash separated relative paths, whatever the host's
separator convention is.

Supported syntax:
- ``*`` any run of characters except ``/``
- ``?`` a single character except ``/``
- ``[...]`` character classes, ranges, ``[!...]``/``[^...]`` negation and
  POSIX classes such as ``[[:alpha:]]``
- ``**`` as a whole segment: zero or more directory segments
- ``{a,b}`` alternation
- ``\\`` escapes the next character (patterns always use ``/`` separators)

Wildcards never match a leading ``.`` of a segment unless ``dot=True`` or
the pattern segment itself starts with a literal dot.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

GLOBSTAR = "**"

# Bodies of the POSIX bracket expressions allowed inside a class
POSIX_CLASSES: dict[str, str] = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": r" \t",
    "digit": "0-9",
    "lower": "a-z",
    "punct": re.escape("!\"#$%&'()*+,-.:;<=>?@[\\]^_`{|}~"),
    "space": r"\s",
    "upper": "A-Z",
    "word": r"\w",
    "xdigit": "0-9A-Fa-f",
}


def normalize_path(path: str) -> str:
    """Convert a relative path to the forward-slash form used for matching.

    Args:
        path: Relative path using either separator.

    Returns:
        Path with ``/`` separators and no leading ``./``.
    """
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations into separate patterns.

    Braces without a top-level comma, or without a closing brace, are
    kept literally.

    Args:
        pattern: Glob pattern.

    Returns:
        List of patterns without brace alternations, in expansion order.
    """
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            close, commas = _scan_brace(pattern, i)
            if close != -1 and commas:
                prefix = pattern[:i]
                suffix = pattern[close + 1 :]
                bounds = [i, *commas, close]
                expanded: list[str] = []
                for start, end in zip(bounds, bounds[1:], strict=False):
                    alternative = pattern[start + 1 : end]
                    expanded.extend(expand_braces(prefix + alternative + suffix))
                return expanded
        i += 1
    return [pattern]


def _scan_brace(pattern: str, open_index: int) -> tuple[int, list[int]]:
    """Find the brace closing the one at ``open_index``.

    Returns:
        Tuple of (closing index or -1, indexes of top-level commas).
    """
    depth = 0
    commas: list[int] = []
    i = open_index
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i, commas
        elif ch == "," and depth == 1:
            commas.append(i)
        i += 1
    return -1, []


def _translate_class(segment: str, start: int) -> tuple[str, int] | None:
    """Translate a ``[...]`` class beginning at ``start``.

    Returns:
        Tuple of (regex fragment, index after the class), or None when the
        class is not terminated and the bracket should be literal.
    """
    i = start + 1
    negate = False
    if i < len(segment) and segment[i] in "!^":
        negate = True
        i += 1
    body: list[str] = []
    first = True
    while i < len(segment):
        ch = segment[i]
        if ch == "]" and not first:
            prefix = "[^/" if negate else "["
            return prefix + "".join(body) + "]", i + 1
        if segment.startswith("[:", i):
            end = segment.find(":]", i + 2)
            if end != -1:
                name = segment[i + 2 : end]
                if name not in POSIX_CLASSES:
                    msg = f"Unknown character class '[:{name}:]'"
                    raise ValueError(msg)
                body.append(POSIX_CLASSES[name])
                i = end + 2
                first = False
                continue
        if ch == "\\" and i + 1 < len(segment):
            body.append(re.escape(segment[i + 1]))
            i += 2
        else:
            body.append("-" if ch == "-" else re.escape(ch))
            i += 1
        first = False
    return None


def _translate_segment(segment: str, dot: bool) -> str:
    """Translate one path segment of a glob to a regex fragment."""
    parts: list[str] = []
    # An escaped leading dot is still a literal dot
    if not dot and not segment.startswith((".", "\\.")):
        parts.append(r"(?!\.)")
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "*":
            parts.append("[^/]*")
            while i < len(segment) and segment[i] == "*":
                i += 1
            continue
        if ch == "?":
            parts.append("[^/]")
        elif ch == "[":
            translated = _translate_class(segment, i)
            if translated is not None:
                fragment, i = translated
                parts.append(fragment)
                continue
            parts.append(re.escape(ch))
        elif ch == "\\" and i + 1 < len(segment):
            i += 1
            parts.append(re.escape(segment[i]))
        else:
            parts.append(re.escape(ch))
        i += 1
    return "".join(parts)


def translate(pattern: str, *, dot: bool = False) -> str:
    """Translate a brace-free glob into a regular expression body.

    Args:
        pattern: Glob pattern without ``{a,b}`` alternations.
        dot: Let wildcards match a leading dot.

    Returns:
        Regex source matching the whole relative path.
    """
    # A globstar segment never matches "." or "..", nor dotfiles unless dot=True
    any_segment = r"(?!\.\.?(?:/|$))[^/]+" if dot else r"(?!\.)[^/]+"
    while pattern.startswith("./"):
        pattern = pattern[2:]
    segments = pattern.split("/")
    parts: list[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == GLOBSTAR:
            if last:
                parts.append(f"{any_segment}(?:/{any_segment})*")
            else:
                parts.append(f"(?:{any_segment}/)*")
            continue
        parts.append(_translate_segment(segment, dot))
        if not last:
            parts.append("/")
    return "".join(parts)


@dataclass(frozen=True, slots=True)
class PathMatcher:
    """One compiled glob pattern.

    Matching is case-sensitive and anchored to the whole relative path.

    Attributes:
        pattern: The glob as written in the configuration.
        dot: Whether wildcards may match a leading dot.
    """

    pattern: str
    dot: bool = False
    _regexes: tuple[re.Pattern[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the pattern, rejecting empty globs."""
        if not self.pattern:
            msg = "Pattern cannot be empty"
            raise ValueError(msg)
        regexes = tuple(
            re.compile(translate(expanded, dot=self.dot), re.DOTALL)
            for expanded in expand_braces(self.pattern)
        )
        object.__setattr__(self, "_regexes", regexes)

    def matches(self, path: str) -> bool:
        """Test a relative path against this pattern.

        Args:
            path: Relative path, with either separator convention.

        Returns:
            True if the whole path matches.
        """
        candidate = normalize_path(path)
        return any(regex.fullmatch(candidate) for regex in self._regexes)


@lru_cache(maxsize=1024)
def _cached_matcher(pattern: str, dot: bool) -> PathMatcher:
    return PathMatcher(pattern, dot=dot)


def matches(pattern: str, path: str, *, dot: bool = False) -> bool:
    """Test a relative path against a glob pattern.

    Args:
        pattern: Glob pattern.
        path: Relative path.
        dot: Let wildcards match a leading dot.

    Returns:
        True if the whole path matches the pattern.
    """
    return _cached_matcher(pattern, dot).matches(path)
