"""
Tests for default value validation against select mode and options.
"""
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dynamic_field.defaults import validate_default
from dynamic_field.models import OptionEntry, OptionSet


@pytest.fixture
def ab_options():
    """Options with keys a and b."""
    return OptionSet.build('Choose...', [OptionEntry('a', 'Apple'), OptionEntry('b', 'Banana')])


class TestSingleSelect:
    """Defaults for single-select fields."""

    def test_multiple_defaults_rejected_with_count(self, ab_options, localizer):
        message = validate_default('a,b', False, ab_options, localizer)

        assert message is not None
        assert '2' in message
        assert 'single-select' in message

    def test_three_defaults_count(self, ab_options, localizer):
        message = validate_default('a,b,', False, ab_options, localizer)
        assert '3' in message

    def test_unknown_default_named(self, ab_options, localizer):
        message = validate_default('z', False, ab_options, localizer)

        assert message is not None
        assert '"z"' in message
        assert 'not found' in message

    def test_known_default_accepted(self, ab_options, localizer):
        assert validate_default('a', False, ab_options, localizer) is None

    def test_sentinel_key_is_not_an_option(self, ab_options, localizer):
        """The empty sentinel key never satisfies the check; empty defaults skip it."""
        assert validate_default('', False, ab_options, localizer) is None
        assert validate_default(' ', False, ab_options, localizer) is not None

    def test_comparison_is_exact(self, ab_options, localizer):
        """Candidates are not trimmed or case folded."""
        assert validate_default(' a', False, ab_options, localizer) is not None
        assert validate_default('A', False, ab_options, localizer) is not None

    def test_labels_are_not_keys(self, ab_options, localizer):
        assert validate_default('Apple', False, ab_options, localizer) is not None


class TestMultiSelect:
    """Multi-select defaults are not cross-checked."""

    def test_unknown_values_not_reported(self, ab_options, localizer):
        assert validate_default('a,z', True, ab_options, localizer) is None

    def test_single_unknown_value_not_reported(self, ab_options, localizer):
        assert validate_default('z', True, ab_options, localizer) is None

    def test_empty_default(self, ab_options, localizer):
        assert validate_default('', True, ab_options, localizer) is None
