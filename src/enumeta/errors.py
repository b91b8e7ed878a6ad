"""Errors raised by enumeta."""


class InvalidInputError(ValueError):
    """Caller passed something that is not a legitimate enum, member or declaration.

    Lookups that simply find nothing never raise; they fall back to the member
    name or the type's default member instead.
    """
