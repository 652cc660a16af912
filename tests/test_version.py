# SPDX-License-Identifier: MIT
"""Unit tests for PEP 440 version parsing."""

import pytest

from pep440_semver import (
    MalformedVersion,
    Version,
    VersionError,
    is_valid_version,
    parse_version,
    version_to_string,
)
from pep440_semver.version import parse_local


class TestParseVersion:
    """Tests for parse_version function."""

    def test_basic_version(self):
        """Test parsing a plain release."""
        v = parse_version("1.2.3")
        assert v.epoch == 0
        assert v.release == (1, 2, 3)
        assert v.pre is None
        assert v.post is None
        assert v.dev is None
        assert v.local is None

    def test_single_segment(self):
        """Test parsing a one-segment release."""
        assert parse_version("7").release == (7,)

    def test_long_release(self):
        """Test that release length is not capped."""
        assert parse_version("1.2.3.4.5.6").release == (1, 2, 3, 4, 5, 6)

    def test_epoch(self):
        """Test parsing an explicit epoch."""
        v = parse_version("2!1.0")
        assert v.epoch == 2
        assert v.release == (1, 0)

    def test_leading_v(self):
        """Test that a leading v or V is discarded."""
        assert parse_version("v1.0") == parse_version("1.0")
        assert parse_version("V1!1.0").epoch == 1

    def test_surrounding_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse_version("  1.0\n").release == (1, 0)

    def test_leading_zeros_in_release(self):
        """Test that release segments are read as integers."""
        assert parse_version("01.002").release == (1, 2)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1.0a1", ("a", 1)),
            ("1.0alpha1", ("a", 1)),
            ("1.0b2", ("b", 2)),
            ("1.0beta2", ("b", 2)),
            ("1.0c3", ("rc", 3)),
            ("1.0rc3", ("rc", 3)),
            ("1.0pre3", ("rc", 3)),
            ("1.0preview3", ("rc", 3)),
            ("1.0-Alpha_2", ("a", 2)),
            ("1.0.RC.1", ("rc", 1)),
        ],
    )
    def test_prerelease_aliases(self, text, expected):
        """Test that every phase spelling normalizes to a canonical phase."""
        assert parse_version(text).pre == expected

    def test_prerelease_number_defaults_to_zero(self):
        """Test that 1.0a means 1.0a0."""
        assert parse_version("1.0a").pre == ("a", 0)
        assert parse_version("1.0a") == parse_version("1.0a0")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1.0.post1", 1),
            ("1.0post1", 1),
            ("1.0-post1", 1),
            ("1.0_post1", 1),
            ("1.0-1", 1),
            ("1.0-12", 12),
            ("1.0rev2", 2),
            ("1.0.r3", 3),
            ("1.0.post", 0),
        ],
    )
    def test_postrelease_forms(self, text, expected):
        """Test every post-release spelling including the bare hyphen."""
        assert parse_version(text).post == expected

    def test_devrelease(self):
        """Test dev-release parsing and its default number."""
        assert parse_version("1.0.dev3").dev == 3
        assert parse_version("1.0dev").dev == 0

    def test_all_qualifiers(self):
        """Test that pre, post and dev may co-occur."""
        v = parse_version("1.0a1.post2.dev3")
        assert v.pre == ("a", 1)
        assert v.post == 2
        assert v.dev == 3

    def test_local_segments(self):
        """Test that local labels split into int and lowercase segments."""
        assert parse_version("1.0+ubuntu-1").local == ("ubuntu", 1)
        assert parse_version("1.0+ABC.5_x").local == ("abc", 5, "x")
        assert parse_version("1.0+01").local == (1,)

    def test_full_version(self):
        """Test a version using every component."""
        v = parse_version("v1!2.0-RC_1.post2+Ubuntu-3")
        assert v == Version(
            release=(2, 0), epoch=1, pre=("rc", 1), post=2, local=("ubuntu", 3)
        )


class TestVersionToString:
    """Tests for canonical rendering."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1.0", "1.0"),
            ("1.0.0", "1.0.0"),
            ("0!1.0", "1.0"),
            ("3!1.0", "3!1.0"),
            ("1.0-1", "1.0.post1"),
            ("1.0-Alpha_2", "1.0a2"),
            ("1.0c1", "1.0rc1"),
            ("1.0.DEV2", "1.0.dev2"),
            ("1.0pre", "1.0rc0"),
            ("1.0+Ubuntu_1", "1.0+ubuntu.1"),
            ("v2.0b1-post3.dev4", "2.0b1.post3.dev4"),
        ],
    )
    def test_canonical_form(self, text, expected):
        """Test the canonical rendering of assorted spellings."""
        assert version_to_string(parse_version(text)) == expected
        assert str(parse_version(text)) == expected

    def test_rendering_parses_back(self):
        """Test that the canonical form parses to an equal version."""
        v = parse_version("1!1.0b2.post3.dev4+abc.7")
        assert parse_version(str(v)) == v


class TestInvalidVersions:
    """Tests for invalid version strings."""

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "abc", "1.2.*", "1..0", "1.0+", "1.0 beta", "1.0+abc def", "!1.0", "1.0-", "1.0a1a2"],
    )
    def test_malformed(self, text):
        """Test that text outside the grammar is rejected."""
        with pytest.raises(MalformedVersion):
            parse_version(text)

    @pytest.mark.parametrize("text", ["1.0prevİew1", "1.0+İ", "1.0+ſ", "١.0"])
    def test_non_ascii_rejected(self, text):
        """Test that letters and digits outside ASCII are not case-folded into the grammar."""
        with pytest.raises(MalformedVersion):
            parse_version(text)

    def test_non_ascii_local_label_rejected(self):
        """Test that local labels only accept ASCII alphanumerics."""
        with pytest.raises(MalformedVersion):
            parse_local("İ")

    @pytest.mark.parametrize(
        "text", ["1." + "9" * 5000, "9" * 5000 + "!1.0", "1.0.post" + "9" * 5000, "1.0+" + "9" * 5000]
    )
    def test_oversized_number_rejected(self, text):
        """Test that numbers too long to convert raise MalformedVersion."""
        with pytest.raises(MalformedVersion) as exc_info:
            parse_version(text)
        assert exc_info.value.text == text

    def test_error_carries_text_and_offset(self):
        """Test that the error reports where parsing stopped."""
        with pytest.raises(MalformedVersion) as exc_info:
            parse_version("1.2.*")
        assert exc_info.value.text == "1.2.*"
        assert exc_info.value.offset == 3

    def test_offset_without_any_match(self):
        """Test the offset when nothing matched."""
        with pytest.raises(MalformedVersion) as exc_info:
            parse_version("  abc")
        assert exc_info.value.offset == 2

    def test_is_value_error(self):
        """Test that parse failures can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_version("abc")
        with pytest.raises(VersionError):
            parse_version("abc")

    def test_non_string_input(self):
        """Test that non-string input raises error."""
        with pytest.raises(MalformedVersion):
            parse_version(123)  # type: ignore

    def test_none_input(self):
        """Test that None input raises error."""
        with pytest.raises(MalformedVersion):
            parse_version(None)  # type: ignore


class TestIsValidVersion:
    """Tests for is_valid_version function."""

    def test_valid(self):
        assert is_valid_version("1.0.post1") is True
        assert is_valid_version(" v1.0 ") is True

    def test_invalid(self):
        assert is_valid_version("1.2.*") is False
        assert is_valid_version("") is False
        assert is_valid_version(1.0) is False  # type: ignore


class TestVersionProperties:
    """Tests for Version convenience properties."""

    def test_is_prerelease(self):
        """Test that pre-releases and dev-releases count as pre-releases."""
        assert parse_version("1.0a1").is_prerelease is True
        assert parse_version("1.0.dev0").is_prerelease is True
        assert parse_version("1.0.post1.dev0").is_prerelease is True
        assert parse_version("1.0.post1").is_prerelease is False
        assert parse_version("1.0").is_prerelease is False

    def test_is_postrelease_and_devrelease(self):
        v = parse_version("1.0.post1.dev2")
        assert v.is_postrelease is True
        assert v.is_devrelease is True

    def test_public(self):
        """Test that public drops the local label."""
        assert parse_version("1.0rc1+abc.1").public == "1.0rc1"

    def test_base_version(self):
        """Test that base_version keeps epoch and release only."""
        assert parse_version("1!1.0rc1.post2+abc").base_version == "1!1.0"

    def test_major_minor_micro(self):
        """Test release accessors pad with zeros."""
        v = parse_version("2")
        assert (v.major, v.minor, v.micro) == (2, 0, 0)
        v = parse_version("1.2.3.4")
        assert (v.major, v.minor, v.micro) == (1, 2, 3)


class TestVersionEquality:
    """Tests for Version equality and hashing."""

    def test_trailing_zeros_equal(self):
        """Test that trailing zeros do not affect equality."""
        assert parse_version("1.0") == parse_version("1.0.0")
        assert hash(parse_version("1.0")) == hash(parse_version("1.0.0"))

    def test_display_preserved(self):
        """Test that equal versions keep their own rendering."""
        assert str(parse_version("1.0.0")) == "1.0.0"

    def test_local_matters(self):
        """Test that local labels take part in equality."""
        assert parse_version("1.0+abc") != parse_version("1.0")

    def test_not_equal_to_string(self):
        """Test that a Version never equals a plain string."""
        assert parse_version("1.0") != "1.0"

    def test_hashable(self):
        """Test that versions are hashable."""
        s = {parse_version("1.0"), parse_version("1.0.0"), parse_version("1.1")}
        assert len(s) == 2

    def test_frozen(self):
        """Test that Version is immutable."""
        v = parse_version("1.0.0")
        with pytest.raises(AttributeError):
            v.epoch = 2  # type: ignore
