"""Metadata kinds that can be attached to enum members."""

from dataclasses import dataclass
from typing import Any

from enumeta.errors import InvalidInputError

_REQUIRED = object()


@dataclass(frozen=True)
class MetadataKind:
    """Shape of one kind of member metadata.

    Calling a kind produces the declaration used with ``annotate``::

        DESCRIPTION("Not Active")
        DEPRECATED()        # carries True
        DEPRECATED(False)
    """

    name: str
    value_type: type
    default: Any = None  # None means an argument is required

    def __call__(self, value: Any = _REQUIRED) -> "KindValue":
        if value is _REQUIRED:
            if self.default is None:
                raise InvalidInputError(f"{self.name} requires a value")
            value = self.default
        if not self.accepts(value):
            raise InvalidInputError(
                f"{self.name} expects {self.value_type.__name__}, got {type(value).__name__}"
            )
        return KindValue(self, value)

    def accepts(self, value: Any) -> bool:
        """Check whether value has this kind's shape."""
        # bool is an int subclass, keep the two apart
        if isinstance(value, bool) != (self.value_type is bool):
            return False
        return isinstance(value, self.value_type)

    @property
    def is_flag(self) -> bool:
        return self.value_type is bool

    def __repr__(self) -> str:
        return f"MetadataKind({self.name!r}, {self.value_type.__name__})"


@dataclass(frozen=True)
class KindValue:
    """A kind paired with the value declared for one member."""

    kind: MetadataKind
    value: Any

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.value!r})"


DESCRIPTION = MetadataKind("description", str)
STRING_VALUE = MetadataKind("string_value", str)
DEPRECATED = MetadataKind("deprecated", bool, True)
INTERVIEW_FLAG = MetadataKind("interview_flag", bool, True)

_KINDS: dict[str, MetadataKind] = {}


def register_kind(kind: MetadataKind) -> MetadataKind:
    """Make a kind available by name (used by the CLI)."""
    existing = _KINDS.get(kind.name)
    if existing is not None and existing != kind:
        raise InvalidInputError(f"Kind {kind.name!r} is already registered as {existing!r}")
    _KINDS[kind.name] = kind
    return kind


def get_kind(name: str) -> MetadataKind:
    """Look up a registered kind by name."""
    try:
        return _KINDS[name]
    except KeyError:
        raise InvalidInputError(f"Unknown metadata kind: {name!r}") from None


def registered_kinds() -> list[MetadataKind]:
    """All registered kinds in registration order."""
    return list(_KINDS.values())


for _kind in (DESCRIPTION, STRING_VALUE, DEPRECATED, INTERVIEW_FLAG):
    register_kind(_kind)

del _kind
