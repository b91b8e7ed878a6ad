"""Enumeta - metadata annotations and lookups for Python enums."""

from enumeta.errors import InvalidInputError
from enumeta.kinds import (
    DEPRECATED,
    DESCRIPTION,
    STRING_VALUE,
    INTERVIEW_FLAG,
    KindValue,
    MetadataKind,
    get_kind,
    register_kind,
    registered_kinds,
)
from enumeta.store import (
    MetadataEntry,
    AnnotationStore,
    EnumAnnotations,
    annotate,
    default_store,
)
from enumeta.resolver import (
    Resolver,
    flag,
    values,
    resolve,
    get_entry,
    represent,
    from_value,
    is_deprecated,
    default_member,
    get_description,
    from_description,
    get_string_value,
    from_string_value,
    has_interview_flag,
    has_metadata_match,
)

__version__ = "0.1.0"
__all__ = [
    "InvalidInputError",
    "MetadataKind",
    "KindValue",
    "DESCRIPTION",
    "STRING_VALUE",
    "DEPRECATED",
    "INTERVIEW_FLAG",
    "get_kind",
    "register_kind",
    "registered_kinds",
    "MetadataEntry",
    "EnumAnnotations",
    "AnnotationStore",
    "annotate",
    "default_store",
    "Resolver",
    "represent",
    "resolve",
    "has_metadata_match",
    "from_value",
    "flag",
    "is_deprecated",
    "has_interview_flag",
    "get_entry",
    "values",
    "default_member",
    "get_description",
    "get_string_value",
    "from_description",
    "from_string_value",
]


def main() -> None:
    """Entry point for CLI."""
    from enumeta.cli import main as cli_main

    cli_main()
