"""Server-rendered HTML: Jinja2 templates and display filters."""

from cryptodash.web.templating import templates

__all__ = ["templates"]
