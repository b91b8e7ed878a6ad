"""Forward, reverse and numeric lookups over annotated enums."""

import enum
import logging
from typing import Any

from enumeta.errors import InvalidInputError
from enumeta.kinds import DEPRECATED, DESCRIPTION, INTERVIEW_FLAG, STRING_VALUE, MetadataKind
from enumeta.store import AnnotationStore, MetadataEntry, default_store

logger = logging.getLogger(__name__)


def _check_member(member: Any) -> enum.Enum:
    if not isinstance(member, enum.Enum):
        raise InvalidInputError(f"Not an enum member: {member!r}")
    return member


class Resolver:
    """Lookups against one AnnotationStore."""

    def __init__(self, store: AnnotationStore | None = None) -> None:
        self.store = store if store is not None else default_store

    def get_entry(self, member: enum.Enum, kind: MetadataKind) -> MetadataEntry | None:
        """Raw entry of kind on member, or None."""
        member = _check_member(member)
        return self.store.annotations_for(type(member)).entry(member.name, kind)

    def represent(self, member: enum.Enum, kind: MetadataKind) -> str:
        """String form of member's kind metadata, or the member name if it has none."""
        entry = self.get_entry(member, kind)
        if entry is None:
            return member.name
        return str(entry.value)

    def _find(self, enum_type: type[enum.Enum], kind: MetadataKind, text: str) -> enum.Enum | None:
        table = self.store.annotations_for(enum_type)

        for member in table.members:
            entry = table.entry(member.name, kind)
            if entry is not None and str(entry.value) == text:
                return member

        for member in table.members:
            if member.name == text:
                return member

        return None

    def resolve(self, enum_type: type[enum.Enum], kind: MetadataKind, text: str) -> enum.Enum:
        """Find the member whose kind metadata, or failing that name, equals text.

        Members are scanned in declaration order and the first match wins, so
        if two members share a value the earlier one is returned. Matching is
        exact and case-sensitive.

        When nothing matches the type's default member is returned rather
        than raising. A default returned this way is indistinguishable from a
        genuine match on the default member; use has_metadata_match() when
        that difference matters.
        """
        member = self._find(enum_type, kind, text)
        if member is None:
            member = self.store.default_member(enum_type)
            logger.debug(
                "No %s match for %r in %s, using default %s",
                kind.name,
                text,
                enum_type.__name__,
                member.name,
            )
        return member

    def has_metadata_match(self, enum_type: type[enum.Enum], kind: MetadataKind, text: str) -> bool:
        """Whether resolve() would find a real match instead of falling back."""
        return self._find(enum_type, kind, text) is not None

    def from_value(self, enum_type: type[enum.Enum], value: int) -> enum.Enum:
        """Member with the given underlying value, or the default member.

        Raises:
            InvalidInputError: if value is not an int (booleans included)
        """
        table = self.store.annotations_for(enum_type)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Expected an integer value, got {value!r}")
        for member in table.members:
            if member.value == value:
                return member

        logger.debug(
            "%r is not a value of %s, using default %s",
            value,
            enum_type.__name__,
            table.default_member.name,
        )
        return table.default_member

    def flag(self, member: enum.Enum, kind: MetadataKind) -> bool:
        """Boolean carried by a flag kind on member, False when absent."""
        if not kind.is_flag:
            raise InvalidInputError(f"{kind.name} is not a boolean kind")
        entry = self.get_entry(member, kind)
        return bool(entry.value) if entry is not None else False

    def is_deprecated(self, member: enum.Enum) -> bool:
        return self.flag(member, DEPRECATED)

    def has_interview_flag(self, member: enum.Enum) -> bool:
        return self.flag(member, INTERVIEW_FLAG)

    def values(self, enum_type: type[enum.Enum]) -> list[enum.Enum]:
        """All members of enum_type in declaration order."""
        return list(self.store.all_members(enum_type))

    def default_member(self, enum_type: type[enum.Enum]) -> enum.Enum:
        return self.store.default_member(enum_type)

    # Shortcuts for the built-in string kinds

    def get_description(self, member: enum.Enum) -> str:
        return self.represent(member, DESCRIPTION)

    def get_string_value(self, member: enum.Enum) -> str:
        return self.represent(member, STRING_VALUE)

    def from_description(self, enum_type: type[enum.Enum], text: str) -> enum.Enum:
        return self.resolve(enum_type, DESCRIPTION, text)

    def from_string_value(self, enum_type: type[enum.Enum], text: str) -> enum.Enum:
        return self.resolve(enum_type, STRING_VALUE, text)


default_resolver = Resolver()

get_entry = default_resolver.get_entry
represent = default_resolver.represent
resolve = default_resolver.resolve
has_metadata_match = default_resolver.has_metadata_match
from_value = default_resolver.from_value
flag = default_resolver.flag
is_deprecated = default_resolver.is_deprecated
has_interview_flag = default_resolver.has_interview_flag
values = default_resolver.values
default_member = default_resolver.default_member
get_description = default_resolver.get_description
get_string_value = default_resolver.get_string_value
from_description = default_resolver.from_description
from_string_value = default_resolver.from_string_value
