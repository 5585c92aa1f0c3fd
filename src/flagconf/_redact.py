"""Copy a configuration model with every non-``noredact`` field zeroed.

Only fields tagged ``Conf("name,noredact")`` survive. A nested model is
recursed into only when its own field is kept; otherwise the whole branch is
zeroed, whatever its children are tagged with.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ._casters import resolve_kind
from ._types import NotARecordError, field_conf, is_record_type, kind_name

M = TypeVar("M", bound=BaseModel)

_EMPTY_CONTAINERS = (list, dict, set, frozenset, tuple)


def _is_kept(info: FieldInfo) -> bool:
    conf = field_conf(info)
    return conf is not None and bool(conf.name) and conf.noredact


def zero_value(annotation: Any, metadata: Iterable[Any] = ()) -> Any:
    """The value a redacted field is left at."""
    kind = resolve_kind(annotation, metadata)
    if kind is not None:
        return kind.zero
    if is_record_type(annotation):
        return _zero_record(annotation)
    if annotation is bytes:
        return b""
    origin = get_origin(annotation) or annotation
    if origin in _EMPTY_CONTAINERS:
        return origin()
    return None


def _zero_record(cls: type[M]) -> M:
    values = {
        attr: zero_value(info.annotation, info.metadata)
        for attr, info in cls.model_fields.items()
    }
    return cls.model_construct(_fields_set=set(), **values)


def _redact(model: M) -> M:
    cls = type(model)
    values: dict[str, Any] = {}
    for attr, info in cls.model_fields.items():
        if not _is_kept(info):
            values[attr] = zero_value(info.annotation, info.metadata)
            continue

        value = getattr(model, attr)
        if is_record_type(info.annotation) and isinstance(value, BaseModel):
            values[attr] = _redact(value)
        else:
            values[attr] = value

    return cls.model_construct(_fields_set=set(model.model_fields_set), **values)


def redact(model: M) -> M:
    """Return a copy of *model* with every field zeroed unless marked ``noredact``.

    Kept values are copied by reference, so a kept list is shared with the
    input. *model* itself is never modified. Private attributes are not
    copied; the result carries their defaults.

    Raises ``NotARecordError`` if *model* is not a pydantic model instance.
    """
    if not isinstance(model, BaseModel):
        raise NotARecordError(kind_name(model))
    return _redact(model)
