"""Template compilation — ``{name}`` placeholders to anchored regexes.

A template is literal text with single-segment placeholders::

    "/user/{id}"              -> (?P<id>[^/]+)
    "/files/{name}.{ext}"     -> (?P<name>[^/]+)\\.(?P<ext>[^/]+)

Literal characters are escaped, so ``.`` and ``+`` in a template match
themselves. The compiled pattern also keeps a reverse template (literal
text and ``Placeholder`` markers) for link generation.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from wren.errors import InvalidTemplate

# One or more characters, never crossing a segment boundary
SEGMENT_PATTERN = r"[^/]+"

# A brace pair with no braces inside. The body is validated separately so
# that ``{}`` and ``{1x}`` are reported instead of silently matched literally.
_PLACEHOLDER_RE = re.compile(r"\{([^{}]*)\}")


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A named slot in a reverse template."""

    name: str

    def __str__(self) -> str:
        return f"{{{self.name}}}"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled route template.

    ``regex`` matches whole paths only. ``parts`` is the reverse template:
    literal strings and ``Placeholder`` markers in template order.
    """

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]
    parts: tuple[str | Placeholder, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured params if *path* matches the whole template."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groupdict()


def _check_name(template: str, name: str, seen: set[str]) -> None:
    if not name:
        raise InvalidTemplate(template, name, "placeholder name is empty")
    if not name.isidentifier():
        raise InvalidTemplate(template, name, "placeholder name must be an identifier")
    if name in seen:
        raise InvalidTemplate(template, name, "placeholder name is used more than once")


@lru_cache(maxsize=1024)
def compile_template(template: str) -> CompiledPattern:
    """Compile a route template into a ``CompiledPattern``.

    Raises ``InvalidTemplate`` if a placeholder name is empty, is not an
    identifier, or appears twice in the same template.
    """
    regex_parts: list[str] = []
    parts: list[str | Placeholder] = []
    names: list[str] = []
    seen: set[str] = set()
    pos = 0

    for m in _PLACEHOLDER_RE.finditer(template):
        literal = template[pos : m.start()]
        if literal:
            regex_parts.append(re.escape(literal))
            parts.append(literal)

        name = m.group(1)
        _check_name(template, name, seen)
        seen.add(name)
        names.append(name)
        regex_parts.append(f"(?P<{name}>{SEGMENT_PATTERN})")
        parts.append(Placeholder(name))
        pos = m.end()

    tail = template[pos:]
    if tail:
        regex_parts.append(re.escape(tail))
        parts.append(tail)

    return CompiledPattern(
        template=template,
        regex=re.compile("".join(regex_parts)),
        param_names=tuple(names),
        parts=tuple(parts),
    )
