"""Typed data model for the practical subset of OpenAPI v3 that specmap reads.

This is the single source of truth for data shapes in the project. Each
entity mirrors one JSON object shape found in real OpenAPI v3 documents and
maps its JSON keys to attributes through Pydantic aliases, so decoding is
purely structural: walk the JSON tree, fill fields by key name.

The entities form a tree rooted at :class:`API`::

    API
    +-- Info
    +-- Server[]
    +-- paths: path -> method -> Method
    |       +-- Parameter[] --> Schema --> Item
    |       +-- responses: status -> Response --> Content
    |       +-- RequestBody --> Content
    +-- components: group -> name -> Type
            +-- properties: name -> Property --> Schema --> Item

``Content`` is a plain mapping of media type -> ``{"schema": Schema}``.

Three leaf shapes carry value descriptions at the depths where they are
observed: :class:`Property` (a field of a component :class:`Type`),
:class:`Schema` (array items, a parameter's value, or a media type's body)
and :class:`Item` (one array element). They intentionally overlap in their
``type`` / ``$ref`` / ``enum`` fields.

Conventions shared by every model:

* Unknown keys (``x-*`` extensions, ``allOf``, ``deprecated``, ...) are
  ignored.
* Absent optional strings are ``None``; a present empty string stays ``""``.
  Absent lists and mappings are empty, absent flags are ``False``. An
  explicit JSON ``null`` reads the same as an absent key.
* Flags only accept JSON booleans; ``"yes"`` or ``1`` is a shape mismatch.
* Attribute assignment is frozen. The lists and dicts a model holds are
  ordinary containers and are not copied or locked; treat them as
  read-only. ``$ref`` values are opaque strings and are never resolved here.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticUseDefault


EnumValue = Union[StrictStr, StrictInt, StrictFloat, StrictBool, None]
"""A JSON scalar allowed inside an ``enum`` list."""


class _Entity(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _null_is_empty(cls, data: object) -> object:
        return {} if data is None else data

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_default(cls, value: object) -> object:
        if value is None:
            raise PydanticUseDefault()
        return value


# --- Value descriptions ---


class Item(_Entity):
    """One array element's value. Leaf level, no further nesting."""

    enum: list[EnumValue] = Field(default_factory=list)
    type: Optional[str] = None
    ref: Optional[str] = Field(default=None, alias="$ref")


class Schema(_Entity):
    """Value description for array items, a parameter, or a media type body.

    When :attr:`items` carries a ``type`` or ``$ref`` the schema describes an
    array; otherwise it is a scalar or object description.
    """

    enum: list[EnumValue] = Field(default_factory=list)
    items: Optional[Item] = None
    type: Optional[str] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    default: Optional[str] = None

    @property
    def is_array(self) -> bool:
        """Whether this schema describes an array of :attr:`items`."""
        return self.items is not None and bool(self.items.type or self.items.ref)


class Property(_Entity):
    """One field of a component :class:`Type`.

    Usually exactly one of :attr:`type` and :attr:`ref` is set, but both,
    either or neither may appear and are kept as given.
    """

    type: Optional[str] = None
    ref: Optional[str] = Field(default=None, alias="$ref")
    items: Optional[Schema] = None
    format: Optional[str] = None
    nullable: StrictBool = False
    enum: list[EnumValue] = Field(default_factory=list)


class Type(_Entity):
    """A named component schema, addressed elsewhere through ``$ref``."""

    required: list[str] = Field(default_factory=list)
    type: Optional[str] = None
    properties: dict[str, Property] = Field(default_factory=dict)


Content = dict[str, dict[str, Schema]]
"""Media type -> ``{"schema": Schema}``."""


# --- Operations ---


class Parameter(_Entity):
    """One input of a :class:`Method`.

    The parameter's value description sits directly under ``schema``; it is
    exposed as ``schema_`` to stay clear of :class:`~pydantic.BaseModel`
    attributes.
    """

    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: StrictBool = False
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(_Entity):
    """Body accepted by a :class:`Method`, keyed by media type."""

    description: Optional[str] = None
    content: Content = Field(default_factory=dict)
    required: StrictBool = False


class Response(_Entity):
    """Expected result for one status code."""

    description: Optional[str] = None
    content: Content = Field(default_factory=dict)


class Method(_Entity):
    """One HTTP verb on one path.

    ``summary`` and ``description`` may both be present; consumers pick which
    one to show. :attr:`request_body` is ``None`` for operations without a
    body.
    """

    tags: list[str] = Field(default_factory=list)
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: list[Parameter] = Field(default_factory=list)
    responses: dict[str, Response] = Field(default_factory=dict)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")


# --- Document ---


class Info(_Entity):
    """Spec metadata."""

    title: Optional[str] = None
    version: Optional[str] = None


class Server(_Entity):
    """A base URL the API is reachable from; list order is preference order."""

    url: Optional[str] = None


class API(_Entity):
    """Root of a decoded OpenAPI v3 document.

    Produced by :func:`~specmap.parser.parse`. ``paths`` maps a URL path to
    its operations keyed by HTTP method as written (usually lower-case);
    ``components`` maps a component group (``schemas``, ``securitySchemes``, ...) to named types.
    """

    version: Optional[str] = Field(default=None, alias="openapi")
    info: Info = Field(default_factory=Info)
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, dict[str, Method]] = Field(default_factory=dict)
    components: dict[str, dict[str, Type]] = Field(default_factory=dict)

    @field_validator("paths", mode="before")
    @classmethod
    def _only_operations(cls, value: object) -> object:
        # Object-valued keys of a path item decode as operations. Path-level
        # parameters, summary, servers and $ref are not objects and are skipped.
        if not isinstance(value, dict):
            return value
        return {
            path: (
                {k: v for k, v in item.items() if isinstance(v, dict)}
                if isinstance(item, dict)
                else {} if item is None else item
            )
            for path, item in value.items()
        }

    def operations(self) -> list[tuple[str, str, Method]]:
        """Return ``(path, method, Method)`` triples in document order."""
        return [
            (path, method, operation)
            for path, item in self.paths.items()
            for method, operation in item.items()
        ]
