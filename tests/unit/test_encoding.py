"""Tests for JSON, wire-text and sortable encodings."""

import json

import pytest

from fixdec import Dec, SortableOutOfBounds, WireDecodeError, max_sortable_dec, sortable_dec_bytes
from fixdec.constants import MAX_DEC_BIT_LEN, NIL_JSON
from fixdec.dec import valid_sortable_dec
from fixdec.encoding import SORTABLE_WIDTH, format_fixed, marshal_wire, unmarshal_wire
from fixdec.errors import BufferTooSmall, EmptyDecimalStr, InvalidDecimalStr, InvalidPrecision

from tests.helpers import d


class TestJSON:
    def test_marshal(self):
        assert d("1.5").marshal_json() == b'"1.500000000000000000"'
        assert d("-0.25").marshal_json() == b'"-0.250000000000000000"'

    def test_marshal_nil(self):
        assert Dec().marshal_json() == NIL_JSON == b'"0"'

    def test_unmarshal(self):
        x = Dec()
        x.unmarshal_json(b'"-3.25"')
        assert x == d("-3.25")

    def test_unmarshal_replaces_value(self):
        x = d("7")
        x.unmarshal_json('"1"')
        assert x == Dec.one()

    def test_round_trip_through_json_document(self):
        doc = json.dumps({"amount": json.loads(d("12.5").marshal_json())})
        x = Dec()
        x.unmarshal_json(json.dumps(json.loads(doc)["amount"]))
        assert x == d("12.5")

    def test_unmarshal_non_string_raises(self):
        with pytest.raises(InvalidDecimalStr):
            Dec().unmarshal_json(b"3.25")

    def test_unmarshal_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            Dec().unmarshal_json(b'"3.25')

    def test_unmarshal_parse_errors(self):
        with pytest.raises(EmptyDecimalStr):
            Dec().unmarshal_json(b'""')
        with pytest.raises(InvalidPrecision):
            Dec().unmarshal_json(b'"0.1234567890123456789"')

    def test_failed_unmarshal_leaves_value(self):
        x = d("7")
        with pytest.raises(InvalidDecimalStr):
            x.unmarshal_json(b'"abc"')
        assert x == d("7")


class TestWire:
    def test_marshal_is_scaled_integer(self):
        assert Dec.one().marshal() == b"1000000000000000000"
        assert d("-1.5").marshal() == b"-1500000000000000000"

    def test_zero_and_nil(self):
        assert Dec.zero().marshal() == b"0"
        assert Dec().marshal() == b"0"

    def test_size(self):
        assert Dec.one().size() == 19
        assert Dec.zero().size() == 1
        assert d("-1.5").size() == 20

    def test_marshal_to(self):
        buf = bytearray(32)
        n = d("1.5").marshal_to(buf)
        assert n == 19
        assert bytes(buf[:n]) == b"1500000000000000000"
        assert buf[n:] == bytearray(32 - n)

    def test_marshal_to_zero(self):
        buf = bytearray(4)
        assert Dec.zero().marshal_to(buf) == 1
        assert buf[:1] == b"0"

    def test_marshal_to_exact_size(self):
        x = d("-1.5")
        buf = bytearray(x.size())
        assert x.marshal_to(buf) == x.size()

    def test_marshal_to_small_buffer_raises(self):
        with pytest.raises(BufferTooSmall):
            Dec.one().marshal_to(bytearray(5))

    def test_unmarshal(self):
        x = Dec()
        x.unmarshal(b"-1500000000000000000")
        assert x == d("-1.5")

    def test_unmarshal_empty_is_nil(self):
        x = d("5")
        x.unmarshal(b"")
        assert x.is_nil()

    @pytest.mark.parametrize("data", [b"12a", b"1.5", b"-", b" 1", b"0x10", b"1_000", b"\xff"])
    def test_unmarshal_malformed_raises(self, data):
        with pytest.raises(WireDecodeError):
            Dec().unmarshal(data)

    def test_unmarshal_out_of_range_raises(self):
        with pytest.raises(WireDecodeError, match="out of range"):
            Dec().unmarshal(str(2**MAX_DEC_BIT_LEN).encode())

    def test_unmarshal_very_long_raises(self):
        """Digit strings past int()'s conversion limit still raise WireDecodeError."""
        with pytest.raises(WireDecodeError, match="out of range"):
            Dec().unmarshal(b"9" * 5000)
        with pytest.raises(WireDecodeError):
            Dec().unmarshal(b"-" + b"9" * 5000)

    def test_unmarshal_leading_zeros(self):
        assert unmarshal_wire(b"0" * 5000 + b"15") == 15

    def test_unmarshal_bound(self):
        raw = 2**MAX_DEC_BIT_LEN - 1
        assert unmarshal_wire(marshal_wire(raw)) == raw

    def test_amino_delegates(self):
        x = d("2.5")
        assert x.marshal_amino() == x.marshal()
        y = Dec()
        y.unmarshal_amino(x.marshal_amino())
        assert y == x

    def test_wire_is_not_human_string(self):
        assert d("1").marshal() != d("1").to_string().encode()


class TestSortable:
    @pytest.mark.parametrize(
        ("dec", "expected"),
        [
            (Dec.from_int(0), b"000000000000000000.000000000000000000"),
            (Dec.from_int(1), b"000000000000000001.000000000000000000"),
            (Dec.from_int(10), b"000000000000000010.000000000000000000"),
            (Dec.from_int(12340), b"000000000000012340.000000000000000000"),
            (Dec.from_int(12340, 4), b"000000000000000001.234000000000000000"),
            (Dec.from_int(12340, 5), b"000000000000000000.123400000000000000"),
            (Dec.from_int(12340, 8), b"000000000000000000.000123400000000000"),
            (Dec.from_int(1009009009009009009, 17), b"000000000000000010.090090090090090090"),
            (Dec.from_int(10**18), b"max"),
            (Dec.from_int(-(10**18)), b"--"),
        ],
    )
    def test_sortable_bytes(self, dec, expected):
        assert sortable_dec_bytes(dec) == expected

    def test_width(self):
        assert len(sortable_dec_bytes(d("123.5"))) == SORTABLE_WIDTH == 37
        assert len(sortable_dec_bytes(d("-123.5"))) == SORTABLE_WIDTH + 1

    def test_negative_key(self):
        assert sortable_dec_bytes(d("-1")) == b"-999999999999999998.999999999999999999"

    def test_max_sortable(self):
        assert max_sortable_dec() == Dec.one().quo(Dec.smallest())
        assert format_fixed(max_sortable_dec().big_int()) == "1000000000000000000.000000000000000000"
        assert sortable_dec_bytes(max_sortable_dec()) == b"max"

    def test_sign_order(self):
        assert sortable_dec_bytes(d("-1")) < sortable_dec_bytes(d("1"))
        assert sortable_dec_bytes(d("-0.000000000000000001")) < sortable_dec_bytes(Dec.zero())

    def test_negative_order(self):
        keys = [sortable_dec_bytes(d(t)) for t in ["-2", "-1.5", "-1", "-0.000000000000000001"]]
        assert keys == sorted(keys)

    def test_boundaries_sort_outside(self):
        upper = sortable_dec_bytes(max_sortable_dec())
        lower = sortable_dec_bytes(max_sortable_dec().neg())
        for text in ["999999999999999999.999999999999999999", "0", "-999999999999999999.999999999999999999"]:
            key = sortable_dec_bytes(d(text))
            assert lower < key < upper

    def test_out_of_bounds_raises(self):
        too_big = max_sortable_dec().add(Dec.smallest())
        assert not valid_sortable_dec(too_big)
        with pytest.raises(SortableOutOfBounds):
            sortable_dec_bytes(too_big)
        with pytest.raises(SortableOutOfBounds):
            sortable_dec_bytes(too_big.neg())

    def test_valid_sortable(self):
        assert valid_sortable_dec(max_sortable_dec())
        assert valid_sortable_dec(max_sortable_dec().neg())
        assert valid_sortable_dec(Dec.zero())
