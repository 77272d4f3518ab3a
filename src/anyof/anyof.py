"""Error responses with several error variants per status code.

AnyOf needs an ErrorSchema whose variants already carry a discriminator (see
``add_discriminator``). Calling it with the variants an endpoint can return
produces an ErrorResponses mapping, ready for FastAPI's ``responses=``:

    class UserNotFound(BaseModel):
        name: str

    class WrongPassword(BaseModel):
        id: str

    class WrongUser(BaseModel):
        id: str

    user_error_schema = add_discriminator(UserNotFound | WrongPassword | WrongUser, "error", kebab_case)
    any_of = AnyOf(user_error_schema)

    user_errors = any_of({UserNotFound: 404, WrongPassword: 403, WrongUser: 403})

    @router.get("/v1/users/{id}", responses=user_errors)
    async def get_user(id: str) -> str:
        raise user_errors.exception(UserNotFound(name=id))

Variants sharing a status code are documented as one discriminated union
(``oneOf`` + ``discriminator``); a status code with a single variant references
that variant's schema directly.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Annotated, Any, Union

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.responses import Response

from anyof.config import settings
from anyof.context import StatusCode, VariantContext, resolve_context
from anyof.coproduct import Discriminator, ErrorSchema, as_error_schema
from anyof.exceptions import AnyOfException, ConfigurationError, MissingDiscriminatorError, UnknownVariantError
from anyof.logging import get_logger

logger = get_logger(__name__)

type Variants = Mapping[type, StatusCode] | Iterable[tuple[type, StatusCode]]


@dataclass(frozen=True)
class ResponseEntry:
    """One documented status code and the variants returned with it."""

    status_code: int
    contexts: tuple[VariantContext, ...]
    model: Any
    description: str = ""
    discriminator: Discriminator | None = None

    def select(self, tag: Any) -> VariantContext | None:
        """First variant whose discriminator value is ``tag``."""
        return next((context for context in self.contexts if context.discriminator == tag), None)

    def openapi(self) -> dict[str, Any]:
        """Additional-response dict in the shape FastAPI's ``responses=`` expects."""
        return {"model": self.model, "description": self.description}


class ErrorResponses(Mapping[int, dict[str, Any]]):
    """Response description for a set of error variants.

    Maps status codes (ascending) to FastAPI additional-response dicts, and
    renders runtime error values with the status code and schema they were
    registered with. The full error type stays available as ``supertype``.
    """

    def __init__(
        self,
        supertype: ErrorSchema,
        entries: Sequence[ResponseEntry],
        *,
        media_type: str,
        response_class: type[Response] = JSONResponse,
    ) -> None:
        if supertype.discriminator is None:
            raise MissingDiscriminatorError(supertype)
        self.supertype = supertype
        self.entries = tuple(entries)
        self.media_type = media_type
        self.response_class = response_class
        self._field_name = supertype.discriminator.field_name
        self._by_status = {entry.status_code: entry for entry in self.entries}

        # Closed variant table: discriminator value -> entry, class -> value
        self._by_tag: dict[Any, ResponseEntry] = {}
        self._tags: dict[type, Any] = {}
        for entry in self.entries:
            for context in entry.contexts:
                self._by_tag[context.discriminator] = entry
                self._tags[context.variant] = context.discriminator
                self._tags[context.schema] = context.discriminator

    def __getitem__(self, status_code: int) -> dict[str, Any]:
        return self._by_status[status_code].openapi()

    def __iter__(self) -> Iterator[int]:
        return iter(self._by_status)

    def __len__(self) -> int:
        return len(self._by_status)

    def __repr__(self) -> str:
        return f"ErrorResponses({[(entry.status_code, entry.model) for entry in self.entries]!r})"

    def tag_of(self, value: Any) -> Any:
        """Discriminator value of a runtime error.

        Membership is decided by class (or the closest registered base), so a
        foreign object carrying a registered tag value is still unknown.
        """
        for klass in type(value).__mro__:
            if klass in self._tags:
                tag = self._tags[klass]
                break
        else:
            raise UnknownVariantError(value)
        if getattr(value, self._field_name, tag) != tag:
            raise UnknownVariantError(value)
        return tag

    def select(self, value: Any) -> tuple[ResponseEntry, VariantContext]:
        """Entry and variant describing ``value``.

        Raises:
            UnknownVariantError: if ``value`` is not one of the registered variants.
        """
        tag = self.tag_of(value)
        entry = self._by_tag[tag]
        context = entry.select(tag)
        if context is None:
            raise UnknownVariantError(value)
        return entry, context

    def matches(self, value: Any) -> bool:
        try:
            self.select(value)
        except UnknownVariantError:
            return False
        return True

    def render(self, value: BaseModel) -> Response:
        """Serialize ``value`` through its variant schema with its status code."""
        entry, context = self.select(value)
        return self.response_class(
            content=context.serialize(value),
            status_code=entry.status_code,
            media_type=self.media_type,
        )

    def exception(self, value: BaseModel) -> AnyOfException:
        """Wrap ``value`` so the registered handler renders it.

        Raises:
            UnknownVariantError: right away, if ``value`` is not registered here.
        """
        self.select(value)
        return AnyOfException(value, self)


class AnyOf:
    """Builds ErrorResponses for endpoints returning errors of one closed type.

    Raises:
        NotACoproductError: if ``schema`` is not a tagged union.
        MissingDiscriminatorError: if it carries no discriminator.
    """

    def __init__(
        self,
        schema: Any,
        *,
        media_type: str | None = None,
        response_class: type[Response] = JSONResponse,
    ) -> None:
        self.schema = as_error_schema(schema)
        if self.schema.discriminator is None:
            raise MissingDiscriminatorError(self.schema)
        self.discriminator = self.schema.discriminator
        self.media_type = media_type or settings.media_type
        self.response_class = response_class

    def __call__(self, variants: Variants) -> ErrorResponses:
        """Resolve ``{variant: status_code}`` registrations and synthesize their responses.

        ``variants`` may also be an iterable of ``(variant, status_code)`` pairs;
        the order given is the order variants are listed in within a status code.
        """
        pairs = variants.items() if isinstance(variants, Mapping) else variants
        contexts = [resolve_context(variant, status_code, self.schema) for variant, status_code in pairs]
        return self.synthesize(contexts)

    def synthesize(self, contexts: Iterable[VariantContext]) -> ErrorResponses:
        """Group contexts by status code, ascending, into response entries."""
        groups: dict[int, list[VariantContext]] = {}
        seen: set[Any] = set()
        for context in contexts:
            if context.discriminator in seen:
                raise ConfigurationError(f"{context.variant.__qualname__} is registered more than once")
            seen.add(context.discriminator)
            groups.setdefault(context.status_code, []).append(context)

        entries = [self._entry(status_code, group) for status_code, group in sorted(groups.items())]
        logger.debug(
            "error_responses_synthesized",
            status_codes=[entry.status_code for entry in entries],
            variants=len(seen),
        )
        return ErrorResponses(
            self.schema,
            entries,
            media_type=self.media_type,
            response_class=self.response_class,
        )

    def _entry(self, status_code: int, group: list[VariantContext]) -> ResponseEntry:
        if len(group) == 1:
            (context,) = group
            return ResponseEntry(status_code, (context,), model=context.schema, description=context.description)

        discriminator = Discriminator(self.discriminator.field_name, dict(context.mapping for context in group))
        union = Union[tuple(context.schema for context in group)]
        return ResponseEntry(
            status_code,
            tuple(group),
            model=Annotated[union, Field(discriminator=discriminator.field_name)],
            discriminator=discriminator,
        )


def synthesize(
    parent_schema: Any,
    contexts: Iterable[VariantContext],
    *,
    media_type: str | None = None,
) -> ErrorResponses:
    """Functional form of ``AnyOf(parent_schema).synthesize(contexts)``."""
    return AnyOf(parent_schema, media_type=media_type).synthesize(contexts)
