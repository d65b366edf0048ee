from pathlib import Path
from typing import Optional, Sequence

from fastapi import Request
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from .errors import AppError
from .schemas.task import Task

TEMPLATE_NAME = "index.html"


class TemplateLoadError(Exception):
    """The page template could not be found or parsed at startup."""


class TaskRenderer:
    """Renders the page shell and the task list from one template.

    The template is parsed once here and reused for every request.
    """

    def __init__(self, templates_dir: Path, template_name: str = TEMPLATE_NAME):
        env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
        )
        try:
            self.template = env.get_template(template_name)
        except TemplateError as exc:
            raise TemplateLoadError(f"failed to parse template: {exc}") from exc

    def render(self, tasks: Optional[Sequence[Task]] = None) -> str:
        try:
            return self.template.render(tasks=tasks)
        except TemplateError as exc:
            raise AppError.render(f"failed to execute template: {exc}") from exc

    def render_shell(self) -> str:
        return self.render(None)

    def render_tasks(self, tasks: Sequence[Task]) -> str:
        return self.render(list(tasks))


def get_renderer(request: Request) -> TaskRenderer:
    return request.app.state.renderer
