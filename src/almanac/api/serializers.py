from __future__ import annotations

from typing import Any, Dict

from ..domain import NoteSource
from ..layout import RenderModel
from .models import NotePayload, RenderPayload


def serialize_note(note: NoteSource) -> Dict[str, Any]:
    return NotePayload.from_domain(note).model_dump()


def serialize_render(model: RenderModel) -> Dict[str, Any]:
    return RenderPayload.from_domain(model).model_dump()
