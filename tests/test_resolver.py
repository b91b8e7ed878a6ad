"""Tests for forward, reverse and numeric lookups."""

import logging
from enum import IntEnum, IntFlag

import pytest

import enumeta
from enumeta import InvalidInputError
from enumeta.kinds import DEPRECATED, DESCRIPTION, INTERVIEW_FLAG, STRING_VALUE, MetadataKind
from enumeta.resolver import Resolver
from enumeta.store import AnnotationStore, annotate

from sample_enums import Color, NotAnEnum, Plain, Status


class TestStatusScenario:
    """The Active/Inactive example end to end through the default store."""

    def test_represent(self):
        assert enumeta.represent(Status.Inactive, DESCRIPTION) == "Not Active"
        assert enumeta.represent(Status.Active, DESCRIPTION) == "Active"

    def test_deprecated(self):
        assert enumeta.is_deprecated(Status.Inactive) is True
        assert enumeta.is_deprecated(Status.Active) is False

    def test_resolve(self):
        assert enumeta.resolve(Status, DESCRIPTION, "Not Active") is Status.Inactive
        assert enumeta.resolve(Status, DESCRIPTION, "nonexistent") is Status.Active

    def test_from_value(self):
        assert enumeta.from_value(Status, 1) is Status.Inactive
        assert enumeta.from_value(Status, 99) is Status.Active


class TestRepresent:
    """Tests for member to string lookup."""

    def test_falls_back_to_name(self):
        """Test members without metadata of a kind."""
        for member in Plain:
            for kind in (DESCRIPTION, STRING_VALUE, DEPRECATED):
                assert enumeta.represent(member, kind) == member.name

    def test_string_kinds(self):
        """Test members with metadata of a kind."""
        assert enumeta.represent(Color.RED, STRING_VALUE) == "r"
        assert enumeta.represent(Color.RED, DESCRIPTION) == "Bright red"
        assert enumeta.represent(Color.GREEN, DESCRIPTION) == "GREEN"

    def test_flag_kinds_render_as_bool(self):
        """Test that flag entries render their carried boolean."""
        assert enumeta.represent(Color.BLUE, DEPRECATED) == "False"
        assert enumeta.represent(Color.BLUE, INTERVIEW_FLAG) == "True"
        assert enumeta.represent(Color.RED, DEPRECATED) == "RED"

    def test_shortcuts(self):
        """Test the named description and string value helpers."""
        assert enumeta.get_description(Status.Inactive) == "Not Active"
        assert enumeta.get_string_value(Color.GREEN) == "g"
        assert enumeta.get_string_value(Status.Active) == "Active"

    def test_get_entry(self):
        """Test raw entry access."""
        entry = enumeta.get_entry(Status.Inactive, DEPRECATED)

        assert entry is not None
        assert entry.value is True
        assert enumeta.get_entry(Status.Active, DEPRECATED) is None

    def test_non_member(self):
        """Test that non-members raise InvalidInputError."""
        with pytest.raises(InvalidInputError):
            enumeta.represent(1, DESCRIPTION)
        with pytest.raises(InvalidInputError):
            enumeta.represent("Active", DESCRIPTION)


class TestResolve:
    """Tests for string to member lookup."""

    @pytest.fixture
    def resolver(self):
        return Resolver(AnnotationStore())

    def test_round_trip(self):
        """Test that represent output resolves back to the member."""
        for enum_type in (Status, Color, Plain):
            for member in enum_type:
                for kind in (DESCRIPTION, STRING_VALUE):
                    text = enumeta.represent(member, kind)
                    assert enumeta.resolve(enum_type, kind, text) is member

    def test_string_value(self):
        """Test reverse lookup by string value."""
        assert enumeta.from_string_value(Color, "b") is Color.BLUE
        assert enumeta.from_description(Color, "Bright red") is Color.RED

    def test_name_fallback(self):
        """Test matching declared names when no metadata matches."""
        assert enumeta.resolve(Color, DESCRIPTION, "BLUE") is Color.BLUE
        assert enumeta.resolve(Plain, STRING_VALUE, "SECOND") is Plain.SECOND

    def test_annotated_member_matches_by_name(self):
        """Test that names match even on members carrying metadata."""
        assert enumeta.resolve(Status, DESCRIPTION, "Inactive") is Status.Inactive

    def test_case_sensitive(self):
        """Test that matching is exact."""
        assert enumeta.resolve(Status, DESCRIPTION, "not active") is Status.Active
        assert not enumeta.has_metadata_match(Status, DESCRIPTION, "not active")
        assert enumeta.resolve(Color, STRING_VALUE, "R") is Color.GREEN

    def test_default_on_no_match(self):
        """Test falling back to the configured default member."""
        assert enumeta.resolve(Color, STRING_VALUE, "purple") is Color.GREEN
        assert enumeta.resolve(Plain, DESCRIPTION, "missing") is Plain.FIRST

    def test_has_metadata_match(self):
        """Test telling real matches apart from the default."""
        assert enumeta.has_metadata_match(Status, DESCRIPTION, "Not Active")
        assert enumeta.has_metadata_match(Status, DESCRIPTION, "Active")
        assert not enumeta.has_metadata_match(Status, DESCRIPTION, "nonexistent")

    def test_metadata_beats_earlier_name(self, resolver):
        """Test that metadata matches are preferred over name matches."""

        @annotate(SECOND=DESCRIPTION("FIRST"), store=resolver.store)
        class Order(IntEnum):
            FIRST = 0
            SECOND = 1

        assert resolver.resolve(Order, DESCRIPTION, "FIRST") is Order.SECOND

    def test_first_match_wins(self, resolver):
        """Test that the earlier member wins when values collide."""

        @annotate(
            A=STRING_VALUE("dup"),
            B=STRING_VALUE("dup"),
            store=resolver.store,
        )
        class Dup(IntEnum):
            B = 1
            A = 0

        assert resolver.resolve(Dup, STRING_VALUE, "dup") is Dup.B

    def test_flag_kind(self):
        """Test reverse lookup against a boolean kind."""
        assert enumeta.resolve(Status, DEPRECATED, "True") is Status.Inactive
        assert enumeta.resolve(Color, DEPRECATED, "False") is Color.BLUE

    def test_custom_kind(self, resolver):
        """Test that a new kind resolves with no resolver changes."""
        code = MetadataKind("iso_code", str)

        @annotate(NO=code("NOR"), SE=code("SWE"), store=resolver.store)
        class Country(IntEnum):
            NO = 0
            SE = 1

        assert resolver.represent(Country.SE, code) == "SWE"
        assert resolver.resolve(Country, code, "SWE") is Country.SE
        assert resolver.resolve(Country, code, "DNK") is Country.NO

    def test_non_enum(self):
        """Test that reverse lookup against a non-enum raises."""
        with pytest.raises(InvalidInputError):
            enumeta.resolve(NotAnEnum, DESCRIPTION, "FIRST")
        with pytest.raises(InvalidInputError):
            enumeta.has_metadata_match(dict, DESCRIPTION, "x")

    def test_logs_fallback(self, caplog):
        """Test that default fallbacks are logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="enumeta.resolver"):
            enumeta.resolve(Status, DESCRIPTION, "nonexistent")

        assert any("using default Active" in r.message for r in caplog.records)

    def test_idempotent(self):
        """Test that repeated lookups give identical results."""
        first = [enumeta.resolve(Color, STRING_VALUE, t) for t in ("r", "x", "BLUE")]
        second = [enumeta.resolve(Color, STRING_VALUE, t) for t in ("r", "x", "BLUE")]

        assert first == second
        assert len(enumeta.default_store.annotations_for(Color)) == 6


class TestFromValue:
    """Tests for numeric lookup."""

    def test_every_member(self):
        """Test that each declared value maps to its member."""
        for enum_type in (Status, Color, Plain):
            for member in enum_type:
                assert enumeta.from_value(enum_type, member.value) is member

    def test_undefined_values(self):
        """Test that undefined values give the default member."""
        assert enumeta.from_value(Color, 0) is Color.GREEN
        assert enumeta.from_value(Color, -5) is Color.GREEN
        assert enumeta.from_value(Plain, 2**40) is Plain.FIRST

    def test_non_enum(self):
        """Test numeric lookup against a non-enum."""
        with pytest.raises(InvalidInputError):
            enumeta.from_value(NotAnEnum, 0)

    def test_non_int_value(self):
        """Test that booleans and non-integers are rejected."""
        for value in (True, False, 1.0, "1", None):
            with pytest.raises(InvalidInputError):
                enumeta.from_value(Status, value)

    def test_flag_zero_value(self):
        """Test numeric lookup of a zero-valued Flag member."""
        resolver = Resolver(AnnotationStore())

        class Perm(IntFlag):
            NONE = 0
            R = 4
            W = 2

        assert resolver.from_value(Perm, 0) is Perm.NONE
        assert resolver.from_value(Perm, 4) is Perm.R
        assert resolver.from_value(Perm, 6) is Perm.NONE


class TestFlags:
    """Tests for boolean flag queries."""

    def test_interview_flag(self):
        assert enumeta.has_interview_flag(Color.BLUE) is True
        assert enumeta.has_interview_flag(Color.RED) is False
        assert enumeta.has_interview_flag(Status.Inactive) is False

    def test_explicit_false(self):
        """Test a flag declared with False."""
        assert enumeta.is_deprecated(Color.BLUE) is False

    def test_flag_requires_bool_kind(self):
        """Test that string kinds cannot be queried as flags."""
        with pytest.raises(InvalidInputError):
            enumeta.flag(Status.Inactive, DESCRIPTION)

    def test_custom_flag(self):
        """Test a user-defined boolean kind."""
        beta = MetadataKind("beta", bool, True)
        resolver = Resolver(AnnotationStore())

        @annotate(ON=beta(), store=resolver.store)
        class Feature(IntEnum):
            OFF = 0
            ON = 1

        assert resolver.flag(Feature.ON, beta) is True
        assert resolver.flag(Feature.OFF, beta) is False

    def test_non_member(self):
        with pytest.raises(InvalidInputError):
            enumeta.is_deprecated(None)


class TestValues:
    """Tests for member enumeration helpers."""

    def test_values(self):
        assert enumeta.values(Color) == [Color.RED, Color.GREEN, Color.BLUE]

    def test_default_member(self):
        assert enumeta.default_member(Status) is Status.Active
        assert enumeta.default_member(Color) is Color.GREEN
