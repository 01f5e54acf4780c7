"""Tag dictionary data models."""

from __future__ import annotations

import re
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TagRule(BaseModel):
    """Keyword (or regex pattern) to tag association.

    An ordered list of rules forms the tag dictionary; the first rule that
    matches a response decides its tag.
    """

    model_config = ConfigDict(frozen=True)

    keyword: str = Field(min_length=1)
    tag: str = Field(min_length=1)
    is_regex: bool = False

    @model_validator(mode="after")
    def _check_pattern(self) -> "TagRule":
        if self.is_regex:
            try:
                re.compile(self.keyword)
            except re.error as e:
                raise ValueError(f"invalid pattern {self.keyword!r}: {e}") from e
        return self

    def matches(self, text: str) -> bool:
        if not text:
            return False
        if self.is_regex:
            return re.search(self.keyword, text) is not None
        return self.keyword.casefold() in text.casefold()

    @classmethod
    def coerce(cls, item: Any) -> "TagRule":
        """Build a rule from the loosely typed items the tag endpoint returns.

        Accepts an existing rule, a bare string (keyword and tag are the same),
        or a dict keyed ``keyword``/``pattern``/``label``/``name`` with an
        optional ``tag``.
        """
        if isinstance(item, TagRule):
            return item
        if isinstance(item, str):
            return cls(keyword=item, tag=item)
        if isinstance(item, dict):
            keyword = item.get("keyword") or item.get("pattern") or item.get("label") or item.get("name")
            tag = item.get("tag") or item.get("label") or keyword
            return cls(keyword=keyword, tag=tag, is_regex=bool(item.get("is_regex", False)))
        raise ValueError(f"cannot interpret tag entry: {item!r}")


def _coerce_rules(value: Any) -> List[TagRule]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("tags must be a list")
    return [TagRule.coerce(item) for item in value]


class TagListResponse(BaseModel):
    """Body of ``GET /tags``."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    tags: List[TagRule] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value):
        return _coerce_rules(value)


class TagUpdateResponse(BaseModel):
    """Body of ``POST /tags``."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str = ""
