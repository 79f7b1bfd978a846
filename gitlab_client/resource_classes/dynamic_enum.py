from enum import Enum
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

T_Enum = TypeVar("T_Enum", bound=Enum)


class DynamicEnum(Generic[T_Enum]):
    """A string value that is usually, but not always, one of the members of an enum.

    GitLab adds new values to fields such as an event's action_name over time. Values that
    the client does not know yet are kept as raw strings instead of failing validation.
    Members are looked up ignoring case. Comparing with an enum member uses the resolved
    member, so DynamicEnum("Pushed To", EventAction) == EventAction.PUSHED_TO. Comparing with
    a string or another DynamicEnum uses the raw value, as do hashing and str().

    Examples:
        >>> action = DynamicEnum("pushed to", EventAction)
        >>> action.value
        <EventAction.PUSHED_TO: 'pushed to'>
        >>> DynamicEnum("teleported", EventAction).value is None
        True
    """

    __slots__ = ("raw", "value")

    def __init__(self, raw: str, enum_cls: type[T_Enum] | None = None) -> None:
        self.raw = raw
        self.value: T_Enum | None = _lookup(enum_cls, raw) if enum_cls is not None else None

    @property
    def is_known(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        if self.value is None:
            return f"{type(self).__name__}(raw={self.raw!r})"
        return f"{type(self).__name__}({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DynamicEnum):
            return self.raw == other.raw
        if isinstance(other, Enum):
            if self.value is not None:
                return self.value is other
            return self.raw == other.value
        if isinstance(other, str):
            return self.raw == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.raw)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        args = get_args(source_type)
        enum_cls: type[Enum] | None = args[0] if args else None

        def validate(value: Any) -> "DynamicEnum":
            if isinstance(value, DynamicEnum):
                return cls(value.raw, enum_cls)
            if isinstance(value, Enum):
                return cls(str(value.value), enum_cls)
            if isinstance(value, str):
                return cls(value, enum_cls)
            raise ValueError(f"Expected a string, got {type(value).__name__}")

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda v: v.raw),
        )


def _lookup(enum_cls: type[T_Enum], raw: str) -> T_Enum | None:
    for member in enum_cls:
        if isinstance(member.value, str) and member.value.casefold() == raw.casefold():
            return member
    return None
