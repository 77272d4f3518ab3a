"""Exceptions raised while wiring error variants to response descriptions.

Everything under ConfigurationError is a fail-fast wiring problem: it is raised
while an endpoint is being defined (usually at import time) and never caught
by this package. UnknownVariantError is the only failure that can happen while
serving a request.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from anyof.anyof import ErrorResponses


class ConfigurationError(Exception):
    """Base class for inconsistent variant, status-code or schema wiring."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotACoproductError(ConfigurationError):
    """Raised when a schema is required to be a tagged union but is not."""

    def __init__(self, schema: object) -> None:
        self.schema = schema
        super().__init__(f"Schema must be of type coproduct but {schema!r}")


class MissingDiscriminatorError(ConfigurationError):
    """Raised when a tagged union has no discriminator metadata yet."""

    def __init__(self, schema: object) -> None:
        self.schema = schema
        super().__init__(f"Schema must contain a discriminator: {schema!r}")


class UnresolvedDiscriminatorValueError(ConfigurationError):
    """Raised when no discriminator mapping entry references a variant."""

    def __init__(self, name: str, mapping: dict[Any, str]) -> None:
        self.name = name
        self.mapping = mapping
        super().__init__(f"Unable to find discriminator for {name} inside {mapping}")


class UnresolvedVariantSchemaError(ConfigurationError):
    """Raised when none of the union's sub-schemas belongs to a variant."""

    def __init__(self, name: str, subtypes: tuple[Any, ...]) -> None:
        self.name = name
        self.subtypes = subtypes
        super().__init__(f"Unable to find schema for {name} in {list(subtypes)}")


class InvalidStatusCodeError(ConfigurationError):
    """Raised when a variant is registered with something that is not an HTTP status."""

    def __init__(self, variant: object, status_code: object) -> None:
        self.variant = variant
        self.status_code = status_code
        super().__init__(f"Invalid status code {status_code!r} for {variant!r}")


class UnknownVariantError(LookupError):
    """Raised when a runtime value does not belong to any registered variant."""

    def __init__(self, value: object) -> None:
        self.value = value
        self.message = f"No error response registered for {type(value).__qualname__}"
        super().__init__(self.message)


class AnyOfException(Exception):
    """Carries an error variant up to the handler that renders it.

    Raise it through ``ErrorResponses.exception(value)``, which checks that the
    value is one of the registered variants.
    """

    def __init__(self, error: Any, responses: "ErrorResponses") -> None:
        self.error = error
        self.responses = responses
        super().__init__(repr(error))
