"""Page view rendering with kida.

A page renders either a template file (``template_name``) loaded through
the environment's loader, or its inline ``template`` source. Inline
sources are compiled once per page class.
"""

from __future__ import annotations

from typing import Any

from kida import Environment

from perch.errors import ConfigurationError


class PageRenderer:
    """Render mounted pages to HTML strings."""

    __slots__ = ("_compiled", "env", "has_loader")

    def __init__(self, env: Environment, *, has_loader: bool = False) -> None:
        self.env = env
        self.has_loader = has_loader
        self._compiled: dict[type, Any] = {}

    def render(self, page: Any) -> str:
        """Render *page* with the context it provides.

        Pages that declare neither ``template_name`` nor ``template``
        render to an empty string.
        """
        template_name = getattr(page, "template_name", None)
        if template_name:
            if not self.has_loader:
                msg = (
                    f"{type(page).__name__} declares template_name={template_name!r} "
                    "but no template_dir is configured in AppConfig."
                )
                raise ConfigurationError(msg)
            template = self.env.get_template(template_name)
        else:
            source = getattr(page, "template", "")
            if not source:
                return ""
            template = self._compiled.get(type(page))
            if template is None:
                template = self.env.from_string(source)
                self._compiled[type(page)] = template

        context = page.context() if hasattr(page, "context") else {}
        return template.render(context)
