import math
from typing import Any, Iterable, List, Type

from pydantic import BaseModel


def serialize(model_cls: Type[BaseModel], obj: Any) -> dict:
    """ORM object -> camelCase JSON-ready dict through the given response model."""
    return model_cls.model_validate(obj).model_dump(by_alias=True, mode="json")


def serialize_many(model_cls: Type[BaseModel], objs: Iterable[Any]) -> List[dict]:
    return [serialize(model_cls, obj) for obj in objs]


def paginated(data: List[dict], total: int, page: int, limit: int) -> dict:
    return {
        "success": True,
        "count": len(data),
        "total": total,
        "page": page,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "data": data,
    }
