"""Tests for stat parsing."""

import pytest

from modrank.errors import ParseError
from modrank.layers.stat_parser import parse_stat, parse_stat_lenient
from modrank.models.mod import Stat


class TestParseStat:
    """Test the strict parser."""

    def test_flat_value_with_plus(self):
        stat = parse_stat("Speed", "+15")
        assert stat.type == "Speed"
        assert stat.value == 15

    def test_percent_value_gets_marked_type(self):
        stat = parse_stat("Critical Chance", "8.5%")
        assert stat == Stat(type="Critical Chance %", value=8.5)

    def test_plus_and_percent(self):
        stat = parse_stat("Offense", "+1.25%")
        assert stat.type == "Offense %"
        assert stat.value == pytest.approx(1.25)

    def test_percent_and_flat_are_different_types(self):
        assert parse_stat("Defense", "+10").type != parse_stat("Defense", "+10%").type

    def test_surrounding_whitespace(self):
        stat = parse_stat(" Speed ", " +4 ")
        assert stat == Stat(type="Speed", value=4.0)

    @pytest.mark.parametrize("raw", ["abc", "", "+", "%", "12abc", "nan", "inf", "1_000", "\u0661\u0662", "1e3", ".5", "5.", "0x1A"])
    def test_invalid_value_raises(self, raw):
        with pytest.raises(ParseError) as exc_info:
            parse_stat("Speed", raw)
        assert exc_info.value.label == "Speed"
        assert exc_info.value.raw_value == raw

    def test_negative_value(self):
        assert parse_stat("Speed", "-2.5") == Stat(type="Speed", value=-2.5)

    def test_stat_is_immutable(self):
        stat = parse_stat("Speed", "+15")
        with pytest.raises(Exception):
            stat.value = 20


class TestParseStatLenient:
    """Test the recovering parser."""

    def test_valid_value_passes_through(self):
        assert parse_stat_lenient("Speed", "+15") == Stat(type="Speed", value=15)

    def test_invalid_value_becomes_zero_value_stat(self):
        assert parse_stat_lenient("Speed", "abc") == Stat(type="", value=0.0)
