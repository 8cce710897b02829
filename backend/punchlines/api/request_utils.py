"""
Helpers for reading loosely-typed JSON request bodies
"""
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_object(request: Request) -> Optional[Dict[str, Any]]:
    """Request body as a dict, or None if it is not a JSON object"""
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


async def parse_body(request: Request, model: Type[ModelT]) -> Optional[ModelT]:
    """Validate the JSON body against ``model``, None when it does not fit"""
    body = await read_json_object(request)
    if body is None:
        return None
    try:
        return model.model_validate(body)
    except ValidationError:
        return None
