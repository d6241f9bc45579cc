"""Template rendering that always produces output and records what happened.

Templates use ``[@ @]`` for variables, ``[! !]`` for blocks and ``[# #]``
for comments. Every step appends a RendererStatus to the renderer's log.
When rendering fails, the error text is returned inside an error page.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2


class StatusKind(enum.Enum):
    """What a log entry records."""

    ADD_TEMPLATE_ERROR = "add_template_error"
    ADD_TEMPLATE_FILE_ERROR = "add_template_file_error"
    ADD_TEMPLATE_SUCCESS = "add_template_success"
    ADD_TEMPLATE_DIR_ERROR = "add_template_dir_error"
    ADD_TEMPLATE_DIR_SUCCESS = "add_template_dir_success"
    GET_TEMPLATE_ERROR = "get_template_error"
    RENDER_CONTENT_ERROR = "render_content_error"
    RENDER_CONTENT_SUCCESS = "render_content_success"


_ERROR_KINDS = frozenset(
    {
        StatusKind.ADD_TEMPLATE_ERROR,
        StatusKind.ADD_TEMPLATE_FILE_ERROR,
        StatusKind.ADD_TEMPLATE_DIR_ERROR,
        StatusKind.GET_TEMPLATE_ERROR,
        StatusKind.RENDER_CONTENT_ERROR,
    }
)


@dataclass(frozen=True)
class RendererStatus:
    """One entry of a renderer's log."""

    kind: StatusKind
    name: str | None = None
    path: Path | None = None
    template: str | None = None
    error_text: str | None = None

    def is_error(self) -> bool:
        """Return whether this entry records a failure."""
        return self.kind in _ERROR_KINDS


def _describe(error: Exception) -> str:
    """Return a readable description of a template error."""
    text = f"{type(error).__name__}: {error}"
    name = getattr(error, "name", None)
    lineno = getattr(error, "lineno", None)
    if name and lineno:
        text += f"\n  in template {name!r}, line {lineno}"
    elif lineno:
        text += f"\n  on line {lineno}"
    return text


def _error_page(error_text: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        "<style>\n"
        "body { background-color: black; color: #aaa; }\n"
        "</style>\n"
        "</head>\n"
        f"<body><pre>{error_text}</pre></body>\n"
    )


class Renderer:
    """Holds a template environment and a log of every operation."""

    def __init__(self) -> None:
        self._templates: dict[str, str] = {}
        self._dir_loader: jinja2.BaseLoader | None = None
        self._error_template: str | None = None
        self.log: list[RendererStatus] = []
        self.env = jinja2.Environment(
            block_start_string="[!",
            block_end_string="!]",
            variable_start_string="[@",
            variable_end_string="@]",
            comment_start_string="[#",
            comment_end_string="#]",
            loader=jinja2.DictLoader(self._templates),
        )

    def _update_loader(self) -> None:
        loaders: list[jinja2.BaseLoader] = [jinja2.DictLoader(self._templates)]
        if self._dir_loader is not None:
            loaders.append(self._dir_loader)
        self.env.loader = jinja2.ChoiceLoader(loaders)

    def add_template(self, name: str, content: str) -> None:
        """Add a template from text, logging a syntax error if it has one."""
        try:
            self.env.parse(content, name=name)
        except jinja2.TemplateSyntaxError as error:
            self.log.append(
                RendererStatus(
                    StatusKind.ADD_TEMPLATE_ERROR, name=name, error_text=_describe(error)
                )
            )
            return
        self._templates[name] = content
        self.log.append(RendererStatus(StatusKind.ADD_TEMPLATE_SUCCESS, name=name))

    def add_template_dir(self, directory: str | os.PathLike[str]) -> None:
        """Load templates not added by name from ``directory``."""
        directory = Path(directory)
        if directory.is_dir():
            self._dir_loader = jinja2.FileSystemLoader(directory)
            self._update_loader()
            self.log.append(
                RendererStatus(StatusKind.ADD_TEMPLATE_DIR_SUCCESS, path=directory)
            )
        else:
            self.log.append(
                RendererStatus(
                    StatusKind.ADD_TEMPLATE_DIR_ERROR,
                    path=directory,
                    error_text=(
                        f"Tried to load templates from missing directory: {directory}"
                    ),
                )
            )

    def add_template_from_path(self, name: str, path: str | os.PathLike[str]) -> None:
        """Add the template held in the file at ``path`` under ``name``."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            self.log.append(
                RendererStatus(
                    StatusKind.ADD_TEMPLATE_FILE_ERROR,
                    name=name,
                    path=path,
                    error_text=f"Error: {error} - on file: {path}",
                )
            )
            return
        self.add_template(name, content)

    def errors(self) -> list[RendererStatus]:
        """Return the log entries that record failures."""
        return [status for status in self.log if status.is_error()]

    def _render_error(self, error_text: str) -> str:
        if self._error_template is not None:
            return self._error_template.replace("{}", error_text)
        return _error_page(error_text)

    def render_content(self, template: str, context: Mapping[str, Any] | None = None) -> str:
        """Render ``template`` with ``context``; on failure return an error page."""
        try:
            tmpl = self.env.get_template(template)
        except jinja2.TemplateError as error:
            error_text = _describe(error)
            self.log.append(
                RendererStatus(
                    StatusKind.GET_TEMPLATE_ERROR, template=template, error_text=error_text
                )
            )
            return self._render_error(error_text)
        try:
            output = tmpl.render(dict(context or {}))
        except Exception as error:  # any failure while rendering becomes output
            error_text = _describe(error)
            self.log.append(
                RendererStatus(
                    StatusKind.RENDER_CONTENT_ERROR, template=template, error_text=error_text
                )
            )
            return self._render_error(error_text)
        self.log.append(RendererStatus(StatusKind.RENDER_CONTENT_SUCCESS, template=template))
        return output

    def set_error_template(self, fmt: str) -> None:
        """Use ``fmt`` for error output; ``{}`` in it is replaced by the error text."""
        self._error_template = fmt