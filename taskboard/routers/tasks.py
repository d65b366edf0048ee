import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import EMPTY_STRING
from ..database import TaskStore, get_store
from ..errors import AppError
from ..rendering import TaskRenderer, get_renderer

router = APIRouter()

REFRESH_HEADER = "HX-Trigger"
REFRESH_EVENT = "get-tasks"

_DIGITS = re.compile(r"[0-9]+")
_MAX_ID = 2**64 - 1


def _refresh_response() -> Response:
    """Empty 200 telling htmx to re-fetch the task list."""
    return Response(status_code=status.HTTP_200_OK, headers={REFRESH_HEADER: REFRESH_EVENT})


def parse_task_id(raw: Optional[str]) -> int:
    if not raw:
        raise AppError.validation(f"failed to get id: {EMPTY_STRING}")
    if not _DIGITS.fullmatch(raw):
        raise AppError.validation(f"failed to parse id: invalid syntax {raw!r}")
    value = int(raw)
    if value > _MAX_ID:
        raise AppError.validation(f"failed to parse id: value out of range {raw!r}")
    return value


def task_id_param(raw_id: Optional[str] = Query(None, alias="id")) -> int:
    """Dependency reading the ``id`` query parameter."""
    return parse_task_id(raw_id)


async def title_field(request: Request) -> str:
    """Dependency reading a non-blank ``title`` from the submitted form.

    Falls back to the query string when the body has no ``title``.
    """
    try:
        form = await request.form()
    except StarletteHTTPException as exc:
        raise AppError.validation(f"failed to parse form: {exc.detail}") from exc

    if "title" in form:
        title = form.get("title")
    else:
        title = request.query_params.get("title")

    if not isinstance(title, str) or not title.strip():
        raise AppError.validation(f"failed to validate form: {EMPTY_STRING}")
    return title


@router.get("/tasks", response_class=HTMLResponse)
def list_tasks(
    store: TaskStore = Depends(get_store),
    renderer: TaskRenderer = Depends(get_renderer),
):
    """Render every task as an HTML list fragment."""
    tasks = store.list_all()
    return HTMLResponse(renderer.render_tasks(tasks))


@router.post("/task/create")
def create_task(
    title: str = Depends(title_field),
    store: TaskStore = Depends(get_store),
):
    store.create(title)
    return _refresh_response()


@router.api_route("/task/edit", methods=["POST", "PUT", "PATCH"])
def edit_task(
    task_id: int = Depends(task_id_param),
    title: str = Depends(title_field),
    store: TaskStore = Depends(get_store),
):
    """Rename a task. Unknown ids are not an error."""
    store.update(task_id, title)
    return _refresh_response()


@router.api_route("/task/delete", methods=["POST", "DELETE"])
def delete_task(
    task_id: int = Depends(task_id_param),
    store: TaskStore = Depends(get_store),
):
    store.delete(task_id)
    return _refresh_response()
