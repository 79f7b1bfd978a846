"""Base classes for GitLab resources and request payloads."""

import sys
import types
from typing import Any, Union, get_args, get_origin

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticUndefined

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


class BaseModelObject(BaseModel):
    """Base class for all object. This includes resources and nested objects.

    GitLab uses snake_case in its JSON, so field names map 1:1 to the API.
    """

    # We allow extra fields to support forward compatibility.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def model_post_init(self, __context: Any) -> None:
        super().model_post_init(__context)
        for field_name, field_info in type(self).model_fields.items():
            if field_name in self.model_fields_set:
                continue
            if field_info.default is PydanticUndefined:
                continue
            if not _is_optional(field_info.annotation):
                self.__pydantic_fields_set__.add(field_name)

    def dump(self, exclude_extra: bool = False) -> dict[str, Any]:
        """Dump the resource to a dictionary.

        Args:
            exclude_extra (bool): Whether to exclude extra fields not defined in the model. Default is False.

        """
        if exclude_extra:
            return self.model_dump(
                mode="json",
                by_alias=True,
                exclude_unset=True,
                exclude=set(self.__pydantic_extra__) if self.__pydantic_extra__ else None,
            )
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def dump_yaml(self, exclude_extra: bool = False) -> str:
        """Dump the resource to a YAML string."""
        return yaml.safe_dump(self.dump(exclude_extra=exclude_extra), sort_keys=False, allow_unicode=True)

    @classmethod
    def _load(cls, resource: dict[str, Any]) -> Self:
        return cls.model_validate(resource)

    @classmethod
    def load_yaml(cls, yaml_content: str) -> Self:
        """Load the resource from a YAML string."""
        content = yaml.safe_load(yaml_content)
        if not isinstance(content, dict):
            raise ValueError(f"YAML content must be a dictionary to load into {cls}, got {type(content)}")
        return cls._load(content)


class RequestResource(BaseModelObject):
    """A payload sent in the body of a POST or PUT request.

    Only the fields that were set are sent, so an update leaves every other field untouched.
    """

    def as_body(self) -> dict[str, Any]:
        return self.dump(exclude_extra=False)


def _is_optional(annotation: Any) -> bool:
    """Check if a type annotation includes None as a valid type."""
    origin = get_origin(annotation)
    # Check for Union type (both typing.Union and | syntax from Python 3.10+)
    is_union = origin is Union or isinstance(annotation, getattr(types, "UnionType", ()))
    if is_union:
        return type(None) in get_args(annotation)
    return False
