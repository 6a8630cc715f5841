"""
Tests for FilterFactory.
"""

import pytest

from mailchain.filters import (
    FilterChain, FilterComposition, FilterFactory, KeywordFilter, SenderFilter
)
from mailchain.message import Message


class TestFilterFactory:
    """Test creating filters and chains from configuration."""

    def test_available_types(self):
        assert FilterFactory.available_types() == ['keyword', 'recipient', 'sender']

    def test_create_filter(self):
        f = FilterFactory.create_filter('sender', {'addresses': ['a']})
        assert isinstance(f, SenderFilter)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown filter type 'size'"):
            FilterFactory.create_filter('size', {})

    def test_create_filter_chain(self):
        chain = FilterFactory.create_filter_chain([
            {'type': 'sender', 'config': {'addresses': ['a']}},
            {'type': 'keyword', 'config': {'keywords_include': ['hi']}},
        ], composition='OR')

        assert isinstance(chain, FilterChain)
        assert chain.composition is FilterComposition.OR
        assert isinstance(chain.filters[1], KeywordFilter)
        assert chain(Message("b", "c", "hi there"))

    def test_chain_missing_type(self):
        with pytest.raises(ValueError, match="missing 'type'"):
            FilterFactory.create_filter_chain([{'config': {}}])

    def test_chain_invalid_filter_config(self):
        with pytest.raises(ValueError, match="Error creating filter 0"):
            FilterFactory.create_filter_chain([{'type': 'sender', 'config': {}}])

    def test_chain_unknown_composition(self):
        with pytest.raises(ValueError, match="composition"):
            FilterFactory.create_filter_chain([], composition='xor')

    def test_chain_entry_not_a_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            FilterFactory.create_filter_chain(['sender'])

    def test_chain_settings_not_a_mapping(self):
        with pytest.raises(ValueError, match="'config' that is not a mapping"):
            FilterFactory.create_filter_chain([{'type': 'sender', 'config': ['a']}])

    def test_chain_null_settings(self):
        chain = FilterFactory.create_filter_chain([{'type': 'keyword', 'config': None}])
        assert chain(Message("a", "b", "anything"))

    def test_non_string_type(self):
        with pytest.raises(ValueError, match="Unknown filter type"):
            FilterFactory.create_filter(['sender'], {})
