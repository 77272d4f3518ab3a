"""Tagged-union schema for a closed error hierarchy.

Pydantic models play the part of record schemas. Python has no first-class
tagged-union value to hang discriminator metadata on, so ErrorSchema carries
the ordered sub-schemas plus the optional Discriminator explicitly. Union
annotations (``A | B | C``) are accepted anywhere an ErrorSchema is.
"""

import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, TypeAliasType, Union, get_args, get_origin

from pydantic import BaseModel, Field

from anyof.exceptions import NotACoproductError


@dataclass(frozen=True)
class Discriminator:
    """Discriminator field name plus ``value -> schema reference`` mapping.

    References are variant full names (see ``anyof.naming.full_name``).
    """

    field_name: str
    mapping: Mapping[Any, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", types.MappingProxyType(dict(self.mapping)))


@dataclass(frozen=True)
class ErrorSchema:
    """Ordered variant sub-schemas of an error type and its discriminator, if any."""

    subtypes: tuple[Any, ...]
    discriminator: Discriminator | None = None

    @classmethod
    def from_union(cls, union: Any) -> "ErrorSchema":
        """Build an undiscriminated schema from ``A | B``, ``Union[A, B]`` or a ``type`` alias of one.

        Raises NotACoproductError for anything that is not a union.
        """
        if isinstance(union, TypeAliasType):
            union = union.__value__
        if get_origin(union) is Annotated:
            union = get_args(union)[0]
        if get_origin(union) not in (Union, types.UnionType):
            raise NotACoproductError(union)
        return cls(subtypes=get_args(union))

    @property
    def is_fully_discriminated(self) -> bool:
        """Every sub-schema is a record referenced from the discriminator mapping."""
        if self.discriminator is None:
            return False
        return len(self.discriminator.mapping) == len(self.subtypes) and all(
            is_record(subtype) for subtype in self.subtypes
        )

    @property
    def annotation(self) -> Any:
        """Type annotation describing the whole error type.

        A pydantic discriminated union when every variant carries the
        discriminator field, a plain union otherwise.
        """
        union = Union[self.subtypes]
        if self.discriminator is None or not self.is_fully_discriminated:
            return union
        return Annotated[union, Field(discriminator=self.discriminator.field_name)]


def is_record(schema: Any) -> bool:
    """Whether a sub-schema is a record (a pydantic model class)."""
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def as_error_schema(schema: Any) -> ErrorSchema:
    """Coerce a union annotation into an ErrorSchema, pass ErrorSchemas through."""
    if isinstance(schema, ErrorSchema):
        return schema
    return ErrorSchema.from_union(schema)
