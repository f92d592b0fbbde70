# tests/test_models.py
"""Rate parsing and record serialization."""
from decimal import Decimal

from cedi_rates_watcher.models import (
    BUY,
    SELL,
    ChannelRate,
    StoredRate,
    format_rate,
    is_empty_rate,
    parse_rate,
)


class TestParseRate:
    def test_numbers_and_strings(self):
        assert parse_rate(10.5) == Decimal("10.5")
        assert parse_rate(11) == Decimal("11")
        assert parse_rate("12.30") == Decimal("12.30")
        assert parse_rate("1,234.5") == Decimal("1234.5")

    def test_unusable_values(self):
        assert parse_rate(None) is None
        assert parse_rate("") is None
        assert parse_rate("  ") is None
        assert parse_rate("n/a") is None
        assert parse_rate(True) is None
        assert parse_rate("NaN") is None

    def test_numeric_equality_ignores_trailing_zeros(self):
        assert parse_rate("10.50") == parse_rate(10.5)


class TestFormatRate:
    def test_format(self):
        assert format_rate(Decimal("10.50")) == "10.5"
        assert format_rate(Decimal("100")) == "100"
        assert format_rate(Decimal("0.00")) == "0"
        assert format_rate(Decimal("1E+2")) == "100"
        assert format_rate(None) == ""


def test_is_empty_rate():
    assert is_empty_rate(None)
    assert is_empty_rate(Decimal("0"))
    assert is_empty_rate(Decimal("0.00"))
    assert not is_empty_rate(Decimal("0.01"))


class TestStoredRate:
    def test_sides(self):
        record = StoredRate("lemfi", "LemFi", Decimal("1"), Decimal("2"))
        assert record.get_side(BUY) == Decimal("1")
        assert record.get_side(SELL) == Decimal("2")
        record.set_side(SELL, Decimal("3"))
        assert record.sell_rate == Decimal("3")
        assert record.buy_rate == Decimal("1")

    def test_redis_mapping(self):
        record = StoredRate("lemfi", "LemFi", Decimal("10.50"), None)
        data = record.to_redis()
        assert data == {
            "channel_slug": "lemfi",
            "channel_name": "LemFi",
            "buy_rate": "10.5",
            "sell_rate": "",
        }
        restored = StoredRate.from_redis(data)
        assert restored.buy_rate == Decimal("10.5")
        assert restored.sell_rate is None


class TestChannelRate:
    def test_from_api(self):
        entry = {
            "company": {"url": "lemfi", "companyName": "LemFi"},
            "dollarRates": {"buyingRate": 15.2, "sellingRate": "15.60"},
        }
        rate = ChannelRate.from_api(entry, "dollarRates")
        assert rate.slug == "lemfi"
        assert rate.name == "LemFi"
        assert rate.buy_rate == Decimal("15.2")
        assert rate.sell_rate == Decimal("15.60")

    def test_missing_currency_key(self):
        entry = {"company": {"url": "lemfi", "companyName": "LemFi"}}
        rate = ChannelRate.from_api(entry, "poundRates")
        assert rate.buy_rate is None
        assert rate.sell_rate is None
