"""Registry of the calendar functions exposed to the CLI and the local HTTP API."""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union, get_args, get_origin

JsonSchema = Dict[str, Any]

_SCHEMA_TYPES: Mapping[Any, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0], True
    return annotation, False


def _schema_type(annotation: Any) -> str:
    inner, _ = _unwrap_optional(annotation)
    return _SCHEMA_TYPES.get(get_origin(inner) or inner, "string")


def _type_label(annotation: Any) -> str:
    inner, optional = _unwrap_optional(annotation)
    label = inner.__name__ if isinstance(inner, type) else str(inner).replace("typing.", "")
    return f"Optional[{label}]" if optional else label


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: tuple[str, ...]
    signature: inspect.Signature

    @property
    def parameters(self) -> Dict[str, str]:
        return {param.name: _type_label(param.annotation) for param in self.signature.parameters.values()}

    @property
    def parameter_schema(self) -> JsonSchema:
        properties: Dict[str, JsonSchema] = {}
        required: List[str] = []
        for param in self.signature.parameters.values():
            prop: JsonSchema = {"type": _schema_type(param.annotation)}
            if param.default is inspect.Parameter.empty:
                required.append(param.name)
            elif isinstance(param.default, (str, int, float, bool)):
                prop["default"] = param.default
            properties[param.name] = prop
        schema: JsonSchema = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def describe(self, *, with_schema: bool = False) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "parameters": self.parameters,
        }
        if with_schema:
            entry["schema"] = self.parameter_schema
        return entry

    def invoke(self, arguments: Mapping[str, Any]) -> Any:
        # Signature.bind raises TypeError for missing or unexpected arguments.
        bound = self.signature.bind(**arguments)
        return self.func(*bound.args, **bound.kwargs)


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            signature=inspect.signature(func, eval_str=True),
        )
        return func

    return decorator


def get_api_functions(category: Optional[str] = None) -> List[ApiFunction]:
    functions = sorted(REGISTRY.values(), key=lambda item: (item.category, item.name))
    if category is None:
        return functions
    return [func for func in functions if func.category == category]


def call_api(name: str, **kwargs: Any) -> Any:
    try:
        api_function = REGISTRY[name]
    except KeyError:
        raise KeyError(f"API function '{name}' is not registered.") from None
    return api_function.invoke(kwargs)
