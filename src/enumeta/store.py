"""Per-enum tables of member metadata."""

import enum
import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from enumeta.errors import InvalidInputError
from enumeta.kinds import KindValue, MetadataKind

logger = logging.getLogger(__name__)

Declarations = Mapping[str, Iterable[KindValue]]


@dataclass(frozen=True)
class MetadataEntry:
    """One metadata value attached to one enum member."""

    member_name: str
    kind: MetadataKind
    value: Any

    def __repr__(self) -> str:
        return f"MetadataEntry({self.member_name}, {self.kind.name}, {self.value!r})"


def declared_members(enum_type: type[enum.Enum]) -> tuple[enum.Enum, ...]:
    """Members in declaration order, aliases excluded.

    Unlike iterating the class, this keeps zero-valued and multi-bit Flag members.
    """
    return tuple(m for name, m in enum_type.__members__.items() if m.name == name)


def check_enum_type(enum_type: Any) -> type[enum.Enum]:
    """Raise InvalidInputError unless enum_type is an Enum class with members."""
    if not isinstance(enum_type, type) or not issubclass(enum_type, enum.Enum):
        raise InvalidInputError(f"Not an enum type: {enum_type!r}")
    if not declared_members(enum_type):
        raise InvalidInputError(f"Enum {enum_type.__name__} has no members")
    return enum_type


class EnumAnnotations:
    """Immutable metadata table for a single enum type."""

    def __init__(
        self,
        enum_type: type[enum.Enum],
        entries: Iterable[MetadataEntry] = (),
        default: str | None = None,
    ) -> None:
        self.enum_type = check_enum_type(enum_type)
        self.members: tuple[enum.Enum, ...] = declared_members(enum_type)
        self._by_key: dict[tuple[str, MetadataKind], MetadataEntry] = {}
        self._by_member: dict[str, list[MetadataEntry]] = {}
        self._all: list[MetadataEntry] = []

        for entry in entries:
            self._add(entry)

        if default is not None:
            self.default_member = self._member_named(default)
        else:
            self.default_member = self._zero_or_first()

    def _member_named(self, name: str) -> enum.Enum:
        for member in self.members:
            if member.name == name:
                return member
        raise InvalidInputError(f"{self.enum_type.__name__} has no member named {name!r}")

    def _zero_or_first(self) -> enum.Enum:
        for member in self.members:
            if member.value == 0:
                return member
        return self.members[0]

    def _add(self, entry: MetadataEntry) -> None:
        self._member_named(entry.member_name)
        key = (entry.member_name, entry.kind)
        if key in self._by_key:
            raise InvalidInputError(
                f"{self.enum_type.__name__}.{entry.member_name} declares {entry.kind.name} twice"
            )
        self._by_key[key] = entry
        self._by_member.setdefault(entry.member_name, []).append(entry)
        self._all.append(entry)

    def entry(self, member_name: str, kind: MetadataKind) -> MetadataEntry | None:
        """Entry of kind on the named member, exact name match only."""
        return self._by_key.get((member_name, kind))

    def value(self, member_name: str, kind: MetadataKind) -> Any | None:
        entry = self.entry(member_name, kind)
        return entry.value if entry is not None else None

    def entries(self, member_name: str) -> list[MetadataEntry]:
        """All entries of one member in declaration order."""
        return list(self._by_member.get(member_name, []))

    @property
    def kinds(self) -> list[MetadataKind]:
        """Kinds used by any member, in order of first use."""
        seen: dict[MetadataKind, None] = {}
        for entry in self._all:
            seen.setdefault(entry.kind, None)
        return list(seen)

    def __iter__(self) -> Iterator[MetadataEntry]:
        return iter(self._all)

    def __len__(self) -> int:
        return len(self._all)

    def __repr__(self) -> str:
        return f"EnumAnnotations({self.enum_type.__name__}, {len(self._all)} entries)"


class AnnotationStore:
    """Process-wide cache of EnumAnnotations keyed by enum type.

    Tables are built once, under a lock, either when a type is registered or
    on its first lookup, and are never modified afterwards.
    """

    def __init__(self) -> None:
        self._tables: dict[type[enum.Enum], EnumAnnotations] = {}
        self._registered: set[type[enum.Enum]] = set()
        self._lock = threading.Lock()

    def register(
        self,
        enum_type: type[enum.Enum],
        table: Declarations,
        *,
        default: str | None = None,
    ) -> EnumAnnotations:
        """Validate declarations for enum_type and store its table.

        Args:
            enum_type: Enum class being annotated
            table: Member name -> kind values declared on that member
            default: Name of the member returned when lookups find nothing

        Returns:
            The built EnumAnnotations

        Raises:
            InvalidInputError: on unknown or alias member names, non-KindValue
                items, a kind declared twice on a member, an unknown default,
                or a type that is already registered or was already looked up.
        """
        check_enum_type(enum_type)
        annotations = EnumAnnotations(enum_type, _entries(enum_type, table), default)
        _warn_shared_values(annotations)

        with self._lock:
            if enum_type in self._registered:
                raise InvalidInputError(f"{enum_type.__name__} is already annotated")
            if enum_type in self._tables:
                raise InvalidInputError(
                    f"{enum_type.__name__} was looked up before it was annotated"
                )
            self._tables[enum_type] = annotations
            self._registered.add(enum_type)

        logger.debug("Registered %d entries for %s", len(annotations), enum_type.__name__)
        return annotations

    def annotations_for(self, enum_type: type[enum.Enum]) -> EnumAnnotations:
        """Get the table for enum_type, building an empty one if never registered."""
        check_enum_type(enum_type)
        table = self._tables.get(enum_type)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(enum_type)
            if table is None:
                logger.debug("No declarations for %s, using empty table", enum_type.__name__)
                table = EnumAnnotations(enum_type)
                self._tables[enum_type] = table
        return table

    def is_registered(self, enum_type: type[enum.Enum]) -> bool:
        return enum_type in self._registered

    def entries_for(
        self, enum_type: type[enum.Enum], member_name: str, kind: MetadataKind
    ) -> Any | None:
        """Value of kind on the named member, or None."""
        return self.annotations_for(enum_type).value(member_name, kind)

    def all_members(self, enum_type: type[enum.Enum]) -> tuple[enum.Enum, ...]:
        """Members of enum_type in declaration order."""
        return self.annotations_for(enum_type).members

    def default_member(self, enum_type: type[enum.Enum]) -> enum.Enum:
        return self.annotations_for(enum_type).default_member


def _entries(enum_type: type[enum.Enum], table: Declarations) -> Iterator[MetadataEntry]:
    members = enum_type.__members__
    for name, declared in table.items():
        member = members.get(name)
        if member is None:
            raise InvalidInputError(f"{enum_type.__name__} has no member named {name!r}")
        if member.name != name:
            raise InvalidInputError(
                f"{enum_type.__name__}.{name} is an alias of {member.name}; annotate the member"
            )
        if isinstance(declared, KindValue):
            declared = [declared]
        for item in declared:
            if not isinstance(item, KindValue):
                raise InvalidInputError(
                    f"{enum_type.__name__}.{name}: expected a kind value such as "
                    f"DESCRIPTION('...'), got {item!r}"
                )
            yield MetadataEntry(name, item.kind, item.value)


def _warn_shared_values(annotations: EnumAnnotations) -> None:
    # Reverse lookup returns the earlier member; uniqueness is not enforced.
    seen: dict[tuple[MetadataKind, Any], str] = {}
    for entry in annotations:
        if entry.kind.is_flag:
            continue
        key = (entry.kind, str(entry.value))
        if key in seen:
            logger.warning(
                "%s.%s and %s.%s share %s %r; reverse lookup returns %s",
                annotations.enum_type.__name__,
                seen[key],
                annotations.enum_type.__name__,
                entry.member_name,
                entry.kind.name,
                entry.value,
                seen[key],
            )
        else:
            seen[key] = entry.member_name


default_store = AnnotationStore()


def annotate(
    table: Declarations | None = None,
    *,
    default: str | None = None,
    store: AnnotationStore | None = None,
    **members: Iterable[KindValue] | KindValue,
):
    """Class decorator attaching metadata to enum members.

    Example::

        @annotate(Inactive=[DESCRIPTION("Not Active"), DEPRECATED()])
        class Status(IntEnum):
            Active = 0
            Inactive = 1

    Members can be given as keyword arguments or, for names that clash with
    the keyword parameters, through the ``table`` mapping.
    """
    declarations: dict[str, Any] = dict(table or {})
    for name, declared in members.items():
        if name in declarations:
            raise InvalidInputError(f"Member {name!r} declared twice")
        declarations[name] = declared

    def decorator(enum_type):
        (store or default_store).register(enum_type, declarations, default=default)
        return enum_type

    return decorator
