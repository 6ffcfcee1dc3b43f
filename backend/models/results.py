from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OpResult(_CamelModel):
    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> "OpResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> "OpResult":
        return cls(success=False, message=message)


class PagedResult(_CamelModel):
    data: list[list[Any]] = Field(default_factory=list)
    total_rows: int = 0
    total_pages: int | None = None
    current_page: int | None = None
    row_numbers: list[int] | None = None
    row_ids: list[int] | None = None

    @classmethod
    def empty(cls) -> "PagedResult":
        # short shape: no pagination fields
        return cls(data=[], total_rows=0)


class FilterOptions(_CamelModel):
    mandal_names: list[Any] = Field(default_factory=list)
    secretraiat_names: list[Any] = Field(default_factory=list)
    employee_ids: list[Any] = Field(default_factory=list)
    employee_names: list[Any] = Field(default_factory=list)
    cluster_ids: list[Any] = Field(default_factory=list)
