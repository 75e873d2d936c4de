from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..models import StoredRecord
from .base import BaseClient, _expect_list, _expect_object

R = TypeVar("R", bound=StoredRecord)

NEWEST_FIRST = "-created_date"


@dataclass
class EntityClient(BaseClient, Generic[R]):
    """CRUD access to one named entity collection of the store.

    ``sort`` takes a field name, prefixed with ``-`` for descending order.
    ``filter`` is an equality match on every given field.
    """

    entity: str = ""
    model: type[R] = StoredRecord  # type: ignore[assignment]

    def list(self, sort: str | None = None, limit: int | None = None) -> list[R]:
        params = _query(sort=sort, limit=limit)
        data = self._request("GET", f"entities/{self.entity}", params=params or None, **self._op("list"))
        return [self.model.model_validate(row) for row in _expect_list(data, f"{self.entity} list")]

    def filter(
        self,
        criteria: Mapping[str, Any],
        sort: str | None = None,
        limit: int | None = None,
    ) -> list[R]:
        params = _query(sort=sort, limit=limit)
        params["q"] = json.dumps(dict(criteria), sort_keys=True, default=str)
        data = self._request("GET", f"entities/{self.entity}", params=params, **self._op("filter"))
        return [self.model.model_validate(row) for row in _expect_list(data, f"{self.entity} filter")]

    def create(self, record: BaseModel | Mapping[str, Any]) -> R:
        data = self._request(
            "POST",
            f"entities/{self.entity}",
            json_body=_payload(record),
            **self._op("create"),
        )
        return self.model.model_validate(_expect_object(data, f"{self.entity} create"))

    def update(self, record_id: str, changes: BaseModel | Mapping[str, Any]) -> R:
        data = self._request(
            "PUT",
            f"entities/{self.entity}/{record_id}",
            json_body=_payload(changes),
            **self._op("update"),
        )
        return self.model.model_validate(_expect_object(data, f"{self.entity} update"))

    def delete(self, record_id: str) -> None:
        self._request("DELETE", f"entities/{self.entity}/{record_id}", **self._op("delete"))

    def _op(self, operation: str) -> dict[str, str]:
        return {"module": self.entity, "operation": operation}


def _query(*, sort: str | None, limit: int | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if sort:
        params["sort"] = sort
    if limit is not None:
        params["limit"] = limit
    return params


def _payload(value: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    return {key: float(item) if isinstance(item, Decimal) else item for key, item in value.items()}
