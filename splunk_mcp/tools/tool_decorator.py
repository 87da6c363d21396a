"""Tool decorator and schema generation for Splunk MCP tools."""

import functools
import inspect
from typing import Any, Callable, Dict, List, Literal, Optional, Union, get_args, get_origin

TOOL_PREFIX = "splunk_"

_JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}

_SECTION_HEADERS = ("Args:", "Returns:", "Raises:", "Examples:")


def _tool_name(func_name: str) -> str:
    """Derive the public tool name, e.g. ``execute_search`` -> ``splunk_search``."""
    name = func_name
    if name.startswith("execute_"):
        name = name[len("execute_"):]
    if name.startswith(TOOL_PREFIX):
        return name
    return f"{TOOL_PREFIX}{name}"


def tool(name: Optional[str] = None) -> Callable:
    """Mark an async function as an MCP tool.

    The tool name defaults to the function name with its ``execute_`` prefix
    replaced by ``splunk_``. The first parameter of a tool receives the server
    instance and is not part of the tool's public schema.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            return await func(*args, **kwargs)

        wrapper._is_tool = True
        wrapper._tool_name = name or _tool_name(func.__name__)
        return wrapper

    return decorator


def _json_type(annotation: Any) -> Dict[str, Any]:
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Union:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1:
            return _json_type(non_none[0])
        return {"type": "string"}

    if origin is Literal:
        return {"type": "string", "enum": list(args)}

    if origin in (list, List):
        item = args[0] if args else str
        return {"type": "array", "items": _json_type(item)}

    return {"type": _JSON_TYPES.get(annotation, "string")}


def _parse_docstring(doc: str) -> tuple:
    """Split a Google style docstring into a description and per-arg text."""
    description_lines: List[str] = []
    params: Dict[str, str] = {}
    section: Optional[str] = None
    seen_args = False
    current: Optional[str] = None

    for raw in inspect.cleandoc(doc).splitlines():
        line = raw.strip()
        if line in _SECTION_HEADERS:
            section = "ignore" if line == "Args:" and seen_args else line
            seen_args = seen_args or line == "Args:"
            current = None
            continue
        if section is None:
            description_lines.append(raw)
        elif section == "Args:" and line:
            if ":" in line and raw.startswith(" " * 4) and not raw.startswith(" " * 8):
                name, text = line.split(":", 1)
                current = name.strip()
                params[current] = text.strip()
            elif current:
                params[current] = f"{params[current]} {line}"

    return "\n".join(description_lines).strip(), params


def get_schema(func: Callable) -> Dict[str, Any]:
    """Build the MCP tool schema for a function decorated with ``@tool()``.

    Raises:
        ValueError: If the function is not a tool or takes no server parameter
    """
    if not getattr(func, "_is_tool", False):
        raise ValueError(f"Function {func.__name__} is not a tool")

    parameters = list(inspect.signature(func).parameters.values())
    if not parameters:
        raise ValueError(f"Tool {func.__name__} must have at least one parameter")

    description, param_docs = _parse_docstring(func.__doc__ or "")

    properties: Dict[str, Any] = {}
    required: List[str] = []
    for param in parameters[1:]:
        annotation = param.annotation if param.annotation is not inspect.Parameter.empty else str
        prop = _json_type(annotation)
        prop["description"] = param_docs.get(param.name, f"{param.name} parameter")
        if param.default is inspect.Parameter.empty:
            required.append(param.name)
        else:
            prop["default"] = param.default
        properties[param.name] = prop

    return {
        "name": func._tool_name,
        "description": description,
        "inputSchema": {
            "type": "object",
            "properties": properties,
            "required": required,
        },
    }
