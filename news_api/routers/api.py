from typing import Any

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from news_api.schemas import EndpointList

router = APIRouter(prefix="/api", tags=["api"])

_SCALAR_EXAMPLES = {"integer": 0, "number": 0.0, "string": "string", "boolean": True}


def example_from_schema(schema: dict, defs: dict | None = None) -> Any:
    """Build a sample value with the shape a JSON schema describes."""
    if defs is None:
        defs = schema.get("$defs", {})
    if "$ref" in schema:
        return example_from_schema(defs[schema["$ref"].rsplit("/", 1)[-1]], defs)
    if "anyOf" in schema:
        options = [s for s in schema["anyOf"] if s.get("type") != "null"]
        return example_from_schema(options[0], defs) if options else None

    kind = schema.get("type")
    if kind == "object":
        return {
            name: example_from_schema(prop, defs)
            for name, prop in schema.get("properties", {}).items()
        }
    if kind == "array":
        return [example_from_schema(schema.get("items", {}), defs)]
    if schema.get("format") == "date-time":
        return "2020-01-01T00:00:00Z"
    return _SCALAR_EXAMPLES.get(kind)


def describe_endpoints(routes) -> dict[str, dict]:
    """
    Build the ``{"GET /api/topics": {"description": ..., "example_response": ...}}``
    map from the registered routes. The description is the first line of
    each endpoint's docstring; the example follows its response model.
    """
    endpoints: dict[str, dict] = {}
    for route in routes:
        if not isinstance(route, APIRoute) or not route.path.startswith("/api"):
            continue
        description = (route.description or route.name).strip().splitlines()[0]
        example = None
        if route.response_model is not None:
            example = example_from_schema(
                route.response_model.model_json_schema(mode="serialization")
            )
        for method in sorted(route.methods):
            endpoints[f"{method} {route.path}"] = {
                "description": description,
                "example_response": example,
            }
    return endpoints


@router.get("", response_model=EndpointList)
async def list_endpoints(request: Request):
    """Every endpoint this API serves."""
    return {"endpoints": describe_endpoints(request.app.routes)}
