"""Project file loading and saving.

Project files are JSON documents of the shape
{"tasks": [...], "dependencies": [...], "members": [...], "settings": {...}}
with dates written as YYYY-MM-DD. Dates are calendar dates; no timezone
conversion is ever applied.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import DEFAULT_OWNER_EFFORT, Dependency, Member, Project, Task, TaskAssignment
from .scheduler.updates import refresh_durations
from .schemas import ProjectSchema

logger = get_logger()


def parse_project(data: dict[str, Any]) -> Project:
    """Build a Project from decoded JSON data.

    Self-dependencies and repeated (source, target) pairs are dropped with a
    warning. Dependencies pointing at unknown tasks are kept; the engine
    ignores them. Durations are recomputed from dates and calendar.

    Raises:
        ValidationError: If the data does not match the project schema
    """
    try:
        schema = ProjectSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid project structure: {e}") from e

    tasks = [
        Task(
            id=t.id,
            name=t.name,
            start=t.start,
            end=t.end,
            duration=t.duration,
            progress=t.progress,
            priority=t.priority,
            status=t.status,
            owner_id=t.owner_id,
            owner_effort=t.owner_effort if t.owner_effort is not None else DEFAULT_OWNER_EFFORT,
            assignments=[TaskAssignment(a.member_id, a.effort) for a in t.assignments],
            role=t.role,
            deliverable=t.deliverable,
            description=t.description,
            kind=t.kind,
            parent_id=t.parent_id,
        )
        for t in schema.tasks
    ]

    dependencies: list[Dependency] = []
    seen_pairs: set[tuple[str, str]] = set()
    for d in schema.dependencies:
        pair = (d.source_id, d.target_id)
        if d.source_id == d.target_id:
            logger.warning("Dropping self-dependency %s on task %s", d.id, d.source_id)
            continue
        if pair in seen_pairs:
            logger.warning("Dropping duplicate dependency %s (%s -> %s)", d.id, *pair)
            continue
        seen_pairs.add(pair)
        dependencies.append(
            Dependency(id=d.id, source_id=d.source_id, target_id=d.target_id, type=d.type)
        )

    members = [
        Member(id=m.id, name=m.name, role=m.role, email=m.email, phone=m.phone, color=m.color)
        for m in schema.members
    ]

    settings = schema.settings
    return Project(
        tasks=refresh_durations(tasks, settings),
        dependencies=dependencies,
        members=members,
        settings=settings,
    )


def load_project(path: Path | str) -> Project:
    """Load a project file.

    Raises:
        ParseError: If the file is missing, is not UTF-8 JSON, or its root is not an object
        ValidationError: If the content does not match the project schema
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    try:
        with path.open(encoding="utf-8-sig") as f:
            data: Any = json.load(f)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"File is not valid UTF-8: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Project file must contain a JSON object at the root level")

    return parse_project(data)  # type: ignore[arg-type]


def _task_to_dict(task: Task) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": task.id,
        "name": task.name,
        "start": task.start.isoformat(),
        "end": task.end.isoformat(),
        "duration": task.duration,
        "progress": task.progress,
        "type": task.kind.value,
        "ownerEffort": task.owner_effort,
        "assignments": [{"memberId": a.member_id, "effort": a.effort} for a in task.assignments],
    }
    if task.priority is not None:
        result["priority"] = task.priority.value
    if task.status is not None:
        result["status"] = task.status.value
    optional = {
        "ownerId": task.owner_id,
        "role": task.role,
        "deliverable": task.deliverable,
        "description": task.description,
        "parentId": task.parent_id,
    }
    result.update({key: value for key, value in optional.items() if value is not None})
    return result


def dump_project(project: Project) -> dict[str, Any]:
    """Convert a project to JSON-ready data (holidays in interval form)."""
    return {
        "tasks": [_task_to_dict(task) for task in project.tasks],
        "dependencies": [
            {"id": d.id, "sourceId": d.source_id, "targetId": d.target_id, "type": d.type.value}
            for d in project.dependencies
        ],
        "members": [
            {
                key: value
                for key, value in {
                    "id": m.id,
                    "name": m.name,
                    "role": m.role,
                    "email": m.email,
                    "phone": m.phone,
                    "color": m.color,
                }.items()
                if value is not None
            }
            for m in project.members
        ],
        "settings": project.settings.model_dump(mode="json", by_alias=True, exclude_none=True),
    }


def save_project(project: Project, path: Path | str) -> None:
    """Write a project file as indented JSON."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(dump_project(project), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.changes("Project written to %s", path)
