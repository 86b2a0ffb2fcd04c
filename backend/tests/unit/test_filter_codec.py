"""
Unit tests for the list-filter JSON codec and engine value converters.
Version: 1.0.0
"""
import pytest

from app.utils.filter_codec import decode_filter_list, encode_filter_list
from app.utils.type_converters import to_float, to_int


pytestmark = pytest.mark.unit


class TestEncodeFilterList:

    def test_none_and_empty_mean_no_constraint(self):
        assert encode_filter_list(None) is None
        assert encode_filter_list([]) is None
        assert encode_filter_list(()) is None

    def test_encodes_json_array_in_order(self):
        assert encode_filter_list(["Sofas", "Chairs"]) == '["Sofas", "Chairs"]'

    def test_keeps_non_ascii(self):
        assert encode_filter_list(["Mármore"]) == '["Mármore"]'

    def test_round_trip_preserves_order(self):
        values = ["Walnut", "Oak", "Ash", "Oak"]
        assert decode_filter_list(encode_filter_list(values)) == values


class TestDecodeFilterList:

    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent(self, raw):
        assert decode_filter_list(raw) is None

    def test_passes_decoded_list_through(self):
        assert decode_filter_list(["Grey"]) == ["Grey"]

    def test_empty_json_array(self):
        assert decode_filter_list("[]") == []

    def test_malformed_json_rejected(self):
        with pytest.raises(ValueError, match="JSON-encoded array"):
            decode_filter_list('["Sofas"')

    @pytest.mark.parametrize("raw", ['"Sofas"', '{"a": 1}', "42"])
    def test_non_array_rejected(self, raw):
        with pytest.raises(ValueError, match="JSON-encoded array"):
            decode_filter_list(raw)

    def test_non_string_items_rejected(self):
        with pytest.raises(ValueError, match="items must be strings"):
            decode_filter_list("[1, 2]")


class TestTypeConverters:

    def test_to_float(self):
        assert to_float("1299.00") == 1299.0
        assert to_float(0) == 0.0
        assert to_float(None) is None
        assert to_float("n/a") is None

    def test_to_int(self):
        assert to_int("37") == 37
        assert to_int(None) is None
        assert to_int(None, 0) == 0
        assert to_int("x", 5) == 5
