"""JSON schema generation from Python function signatures."""

import inspect
from typing import Annotated, Any, Callable, Dict, FrozenSet, Tuple, Type, cast, get_args, get_origin

import jsonref  # type: ignore
from pydantic import BaseModel, Field, create_model
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


def build_args_model(func: Callable, tool_name: str) -> Type[BaseModel]:
    """Create a pydantic model mirroring the parameters of ``func``.

    Parameter descriptions are taken from ``Annotated[T, Field(description=...)]``
    metadata when present.

    Raises:
        ToolValidationError: If a parameter has no type annotation.
    """
    fields: Dict[str, Tuple[Any, FieldInfo]] = {}
    for param_name, param in inspect.signature(func, eval_str=True).parameters.items():
        if param_name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.annotation is inspect.Parameter.empty:
            msg = f"Parameter '{param_name}' of tool '{tool_name}' has no type annotation."
            logger.error(msg)
            raise ToolValidationError(msg)

        default = param.default if param.default is not inspect.Parameter.empty else ...
        fields[param_name] = (
            param.annotation,
            Field(default=default, description=_description_of(param.annotation)),
        )

    return create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))


def parameters_schema(args_model: Type[BaseModel]) -> Dict[str, Any]:
    """Return the sanitized, ``$ref``-free JSON schema of an arguments model.

    Raises:
        ToolValidationError: If the model refers to itself, directly or through
            another model. Such schemas cannot be inlined.
    """
    raw_schema = args_model.model_json_schema()
    assert_no_recursive_refs(raw_schema)
    # proxies=False gives plain dicts; merge_props keeps descriptions placed next to a $ref
    resolved = jsonref.replace_refs(raw_schema, proxies=False, merge_props=True)
    return _strip_metadata(resolved)


def _description_of(annotation: Any) -> str | None:
    if get_origin(annotation) is Annotated:
        for metadata in get_args(annotation)[1:]:
            if isinstance(metadata, FieldInfo) and metadata.description:
                return metadata.description
    return None


def _strip_metadata(node: Any) -> Any:
    if isinstance(node, list):
        return [_strip_metadata(item) for item in node]
    if not isinstance(node, dict):
        return node

    cleaned = {}
    for key, value in node.items():
        if key in _METADATA_KEYS:
            continue
        # "properties" maps user field names, which may legitimately be called "title"
        if key == "properties" and isinstance(value, dict):
            cleaned[key] = {name: _strip_metadata(prop) for name, prop in value.items()}
        else:
            cleaned[key] = _strip_metadata(value)
    return cleaned


def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
    """Walk the ``$ref`` graph of ``schema`` and reject cycles.

    Raises:
        ToolValidationError: If a reference is reached again through itself.
    """
    defs = schema.get("$defs", {}) or schema.get("definitions", {})

    def check(node: Any, path: FrozenSet[str]) -> None:
        if isinstance(node, dict):
            if "$ref" in node:
                ref = node["$ref"]
                if ref in path:
                    msg = (
                        f"Recursive structure detected: {ref}. "
                        "Recursive structures are not allowed in tool inputs."
                    )
                    logger.error(msg)
                    raise ToolValidationError(msg)

                # local refs look like "#/$defs/Model"
                parts = ref.split("/")
                if ref.startswith("#") and len(parts) >= 3 and parts[-1] in defs:
                    check(defs[parts[-1]], path | {ref})
                return

            for value in node.values():
                check(value, path)
        elif isinstance(node, list):
            for item in node:
                check(item, path)

    check(schema, frozenset())
