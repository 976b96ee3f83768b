"""Unit tests for the Username value object."""

import pytest
from pydantic import ValidationError

from knowshare.domain.value import Username


class TestUsername:
    """Tests for Username validation and derivation."""

    def test_valid_username(self):
        """Plain handles are accepted and print as themselves."""
        username = Username("alice.smith")

        assert username.root == "alice.smith"
        assert str(username) == "alice.smith"

    @pytest.mark.parametrize("value", ["", "with space", "tab\there", "a" * 256])
    def test_invalid_username(self, value):
        """Empty, whitespace-bearing or oversized handles are refused."""
        with pytest.raises(ValidationError):
            Username(value)

    def test_equal_usernames_hash_alike(self):
        """Usernames compare and hash by value."""
        assert Username("bob") == Username("bob")
        assert len({Username("bob"), Username("bob"), Username("alice")}) == 2

    def test_ordering_is_by_code_point(self):
        """Sorting follows the raw string order."""
        assert sorted([Username("bob"), Username("Zed"), Username("alice")]) == [
            Username("Zed"),
            Username("alice"),
            Username("bob"),
        ]


class TestFromEmail:
    """Tests for Username.from_email."""

    def test_uses_local_part(self):
        """The username is everything before the @."""
        assert Username.from_email("jane.doe@uni.example") == Username("jane.doe")

    def test_strips_surrounding_whitespace(self):
        """Stray whitespace around the address is ignored."""
        assert Username.from_email("  jane@uni.example ") == Username("jane")

    def test_missing_local_part_is_invalid(self):
        """An address starting with @ has no usable local part."""
        with pytest.raises(ValidationError):
            Username.from_email("@uni.example")
