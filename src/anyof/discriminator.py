"""Discriminator injection for tagged-union error schemas.

add_discriminator() does two things to an undiscriminated ErrorSchema:

- appends a required ``<field_name>: Literal[<value>]`` field to every record
  variant, producing a derived model that keeps the variant's name, module and
  docstring so it documents under the same component name;
- registers the ``value -> variant reference`` mapping on the union itself.

Non-record variants are kept as they are and left out of the mapping.
"""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from anyof.config import settings
from anyof.coproduct import Discriminator, ErrorSchema, as_error_schema, is_record
from anyof.exceptions import ConfigurationError
from anyof.logging import get_logger
from anyof.naming import full_name, identity, simple_name

logger = get_logger(__name__)


def add_discriminator(
    schema: Any,
    field_name: str,
    name_to_discriminator: Callable[[str], Any] = identity,
) -> ErrorSchema:
    """Add a discriminator field to a tagged-union schema.

    Args:
        schema: an ErrorSchema or a union annotation such as ``A | B | C``
        field_name: name of the discriminator field, e.g. ``"error"``
        name_to_discriminator: turns a variant's simple class name into its
            discriminator value. Returning non-string literals (ints, enum
            members) yields non-string discriminators.

    Returns:
        A new ErrorSchema; the input is left untouched.

    Raises:
        NotACoproductError: if ``schema`` is not a tagged union.
        ConfigurationError: if two variants derive the same discriminator value.
    """
    coproduct = as_error_schema(schema)

    subtypes: list[Any] = []
    mapping: dict[Any, str] = {}
    for subtype in coproduct.subtypes:
        if not is_record(subtype):
            _log_skipped(subtype)
            subtypes.append(subtype)
            continue

        name = full_name(subtype)
        value = name_to_discriminator(simple_name(name))
        if value in mapping:
            raise ConfigurationError(
                f"Discriminator value {value!r} is derived for both {mapping[value]} and {name}"
            )

        subtypes.append(_with_discriminator_field(subtype, field_name, value))
        mapping[value] = name

    logger.debug("discriminator_added", field=field_name, values=list(mapping))
    return ErrorSchema(subtypes=tuple(subtypes), discriminator=Discriminator(field_name, mapping))


def _with_discriminator_field(model: type[BaseModel], field_name: str, value: Any) -> type[BaseModel]:
    namespace: dict[str, Any] = {
        "__module__": model.__module__,
        "__qualname__": model.__qualname__,
        "__doc__": model.__doc__,
        "__annotations__": {field_name: Literal[value]},
        field_name: value,
        # The default only fills the tag in when serializing a parent instance;
        # documented output schemas must still list the field as required.
        "model_config": ConfigDict(json_schema_serialization_defaults_required=True),
    }
    return type(model)(model.__name__, (model,), namespace)


def _log_skipped(subtype: Any) -> None:
    log = logger.warning if settings.warn_on_skipped_variants else logger.debug
    log("discriminator_variant_skipped", variant=repr(subtype), reason="not a record schema")
