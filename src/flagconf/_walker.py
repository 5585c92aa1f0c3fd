"""Depth-first discovery of bindable fields on a pydantic model.

Only fields tagged with a named ``Conf`` marker take part. Nested model
fields are expanded in place, their children named ``<parent>-<child>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ._casters import PrimitiveKind, resolve_kind
from ._types import Conf, field_conf, is_record_type


@dataclass(frozen=True)
class FieldDescriptor:
    """One terminal field reachable from the root model."""

    path: str
    conf: Conf
    kind: PrimitiveKind
    owner: BaseModel
    attr: str
    usage: str = ""

    @property
    def value(self) -> Any:
        return getattr(self.owner, self.attr)


def _is_frozen(model: BaseModel, info: FieldInfo) -> bool:
    return bool(info.frozen or type(model).model_config.get("frozen"))


def walk_fields(model: BaseModel, prefix: str = "") -> Iterator[FieldDescriptor]:
    """Yield a descriptor per bindable primitive field, in declaration order.

    Skipped silently: untagged fields, fields with an empty exposed name,
    private attributes, frozen fields and fields of unsupported types.
    """
    for attr, info in type(model).model_fields.items():
        conf = field_conf(info)
        if conf is None or not conf.name:
            continue

        path = f"{prefix}-{conf.name}" if prefix else conf.name

        if is_record_type(info.annotation):
            child = getattr(model, attr)
            if isinstance(child, BaseModel):
                yield from walk_fields(child, path)
            continue

        kind = resolve_kind(info.annotation, info.metadata)
        if kind is None or _is_frozen(model, info):
            continue

        yield FieldDescriptor(
            path=path,
            conf=conf,
            kind=kind,
            owner=model,
            attr=attr,
            usage=conf.usage or info.description or "",
        )
