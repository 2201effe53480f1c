"""Token substitution over template files and trees."""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Mapping

from .errors import CreateProjectError
from .naming import CASE_CONVERTERS

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "TokenSet",
]

LOGGER = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")

OPEN_TAG = "{{"
CLOSE_TAG = "}}"


class TemplateRenderingError(CreateProjectError):
    """Raised when a strict render meets a placeholder it cannot evaluate."""


class TokenSet(Mapping[str, str]):
    """Read-only placeholder values plus the ``openTag``/``closeTag`` markers.

    Templates that need literal delimiters in their output write
    ``{{ openTag }}`` and ``{{ closeTag }}``.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = {"openTag": OPEN_TAG, "closeTag": CLOSE_TAG}
        self._values.update(values or {})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TokenSet({self._values!r})"


@dataclass(slots=True)
class TemplateRenderer:
    """Render ``{{ token|filter }}`` placeholders in strings, files and trees.

    Filters are the case converters from :mod:`createproject.naming`, so a
    template can write ``{{ packageName|title }}``. Rendering is a single
    left-to-right scan. Unknown tokens are kept verbatim unless ``strict`` is
    set, which makes rendering an already rendered tree a no-op.
    """

    filters: Mapping[str, Callable[[str], str]] = field(default_factory=lambda: dict(CASE_CONVERTERS))

    def render_string(self, template: str, tokens: Mapping[str, str], *, strict: bool = False) -> str:
        """Substitute ``tokens`` into ``template``.

        With ``strict`` an unknown token or filter raises
        :class:`TemplateRenderingError`; otherwise the placeholder is left
        untouched.
        """

        def substitute(match: re.Match[str]) -> str:
            key, *filter_names = [part.strip() for part in match.group("expression").split("|")]
            if key not in tokens or any(name not in self.filters for name in filter_names):
                if strict:
                    raise TemplateRenderingError(f"cannot render placeholder '{match.group(0)}'")
                return match.group(0)

            value = str(tokens[key])
            for name in filter_names:
                value = self.filters[name](value)
            return value

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def render_file(
        self,
        template_path: str | Path,
        tokens: Mapping[str, str],
        target: str | Path,
        *,
        strict: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        """Render ``template_path`` into ``target``, keeping its file mode.

        Files that cannot be decoded with ``encoding`` are treated as binary
        and copied unchanged.
        """

        template_path = Path(template_path)
        target_path = Path(target)
        raw = template_path.read_bytes()
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError:
            if target_path.resolve() != template_path.resolve():
                target_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(template_path, target_path)
                shutil.copymode(template_path, target_path)
            return

        rendered = self.render_string(text, tokens, strict=strict)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(rendered.encode(encoding))
        shutil.copymode(template_path, target_path)

    def render_directory(
        self,
        template_dir: str | Path,
        target_dir: str | Path,
        tokens: Mapping[str, str],
        *,
        strict: bool = False,
        rename: Mapping[str, str] | None = None,
    ) -> list[Path]:
        """Render every file inside ``template_dir`` into ``target_dir``.

        Placeholders in file and directory names are substituted as well.
        ``rename`` maps template file names to output names, which lets bundled
        templates ship files such as ``gitignore`` that packaging would drop
        under their real dotted name. Returns the written files.
        """

        template_dir = Path(template_dir)
        target_dir = Path(target_dir)
        if not template_dir.is_dir():
            raise FileNotFoundError(template_dir)

        renames = dict(rename or {})
        written: list[Path] = []
        # Snapshot first: rendering in place may create renamed siblings.
        for source in sorted(template_dir.rglob("*")):
            relative = source.relative_to(template_dir)
            parts = [self.render_string(part, tokens, strict=strict) for part in relative.parts]
            parts[-1] = renames.get(parts[-1], parts[-1])
            destination = target_dir.joinpath(*parts)

            if source.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
                continue

            self.render_file(source, tokens, destination, strict=strict)
            written.append(destination)

        LOGGER.debug("Rendered %d files from %s into %s", len(written), template_dir, target_dir)
        return written
