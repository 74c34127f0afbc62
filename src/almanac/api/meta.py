from __future__ import annotations

from typing import Any, Dict, List, Optional

from .registry import get_api_functions, register_api


@register_api(
    "list_available_tools",
    description="Describe the registered calendar functions, optionally limited to one category.",
    category="meta",
    tags=("metadata",),
)
def list_available_tools(category: Optional[str] = None) -> Dict[str, Any]:
    tools: List[Dict[str, Any]] = [func.describe(with_schema=True) for func in get_api_functions(category)]
    categories = sorted({func.category for func in get_api_functions()})
    return {"tools": tools, "categories": categories}
