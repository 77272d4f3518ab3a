"""Resolution of a registered error variant against its parent error schema."""

import inspect
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel

from anyof.coproduct import as_error_schema, is_record
from anyof.exceptions import (
    InvalidStatusCodeError,
    MissingDiscriminatorError,
    UnresolvedDiscriminatorValueError,
    UnresolvedVariantSchemaError,
)
from anyof.naming import full_name

type StatusCode = int | str | HTTPStatus


@dataclass(frozen=True)
class VariantContext:
    """Everything needed to document and serialize one error variant.

    ``variant`` is the class callers register and raise, ``schema`` the
    discriminated model found in the parent schema for it.
    """

    variant: type
    status_code: int
    discriminator: Any
    schema: type[BaseModel]

    @property
    def mapping(self) -> tuple[Any, str]:
        """Discriminator mapping entry, e.g. ``("user-not-found", "app.errors.UserNotFound")``."""
        return self.discriminator, full_name(self.schema)

    @property
    def description(self) -> str:
        return inspect.cleandoc(self.schema.__doc__) if self.schema.__doc__ else ""

    def serialize(self, value: BaseModel) -> Any:
        """Dump ``value`` through the variant schema so the discriminator is included."""
        if not isinstance(value, self.schema):
            value = self.schema.model_validate(value, from_attributes=True, by_name=True)
        return value.model_dump(mode="json", by_alias=True)


def resolve_context(variant: type, status_code: StatusCode, parent_schema: Any) -> VariantContext:
    """Pair ``variant`` with its status code, discriminator value and schema.

    Raises:
        NotACoproductError: if ``parent_schema`` is not a tagged union.
        MissingDiscriminatorError: if it has no discriminator yet.
        UnresolvedDiscriminatorValueError: if no mapping entry references ``variant``.
        UnresolvedVariantSchemaError: if no sub-schema belongs to ``variant``.
        InvalidStatusCodeError: if ``status_code`` is not an HTTP status.
    """
    coproduct = as_error_schema(parent_schema)
    if coproduct.discriminator is None:
        raise MissingDiscriminatorError(coproduct)

    name = full_name(variant)
    mapping = dict(coproduct.discriminator.mapping)

    values = [value for value, reference in mapping.items() if reference == name]
    if not values:
        raise UnresolvedDiscriminatorValueError(name, mapping)

    schemas = [subtype for subtype in coproduct.subtypes if is_record(subtype) and full_name(subtype) == name]
    if not schemas:
        raise UnresolvedVariantSchemaError(name, coproduct.subtypes)

    return VariantContext(
        variant=variant,
        status_code=_status_code(variant, status_code),
        discriminator=values[0],
        schema=schemas[0],
    )


def _status_code(variant: type, status_code: StatusCode) -> int:
    try:
        code = int(status_code)
    except (TypeError, ValueError) as exc:
        raise InvalidStatusCodeError(variant, status_code) from exc
    if isinstance(status_code, bool) or not 100 <= code <= 599:
        raise InvalidStatusCodeError(variant, status_code)
    return code
