"""Unit tests for per-field offer validators."""

import pytest

from listings.offers.config import OfferRules
from listings.offers.models import ErrorKind
from listings.offers.validators import (
    parse_integer,
    parse_number,
    validate_address,
    validate_checkin,
    validate_checkout,
    validate_features,
    validate_fields,
    validate_guests,
    validate_location,
    validate_price,
    validate_rooms,
    validate_title,
    validate_type,
)

RULES = OfferRules()

VALID_FIELDS = dict(
    name="Anna",
    title="Small flat in the city centre near the Central Park",
    address="570, 472",
    price=30000,
    type="flat",
    rooms=0,
    guests=1,
    checkin="9:00",
    checkout="12:00",
    features=["elevator", "conditioner"],
    location={"x": 570, "y": 472},
)


def make_fields(**overrides) -> dict:
    return {**VALID_FIELDS, **overrides}


def kinds(errors) -> list[ErrorKind]:
    return [e.kind for e in errors]


# ---------------------------------------------------------------------------
# Required fields
# ---------------------------------------------------------------------------


class TestRequiredFields:
    @pytest.mark.parametrize(
        "field", ["title", "type", "price", "address", "rooms", "checkin", "checkout"]
    )
    @pytest.mark.parametrize("missing", [None, "", "   "])
    def test_missing_value_yields_one_required_error(self, field, missing):
        errors = validate_fields(make_fields(**{field: missing}), RULES)
        assert len(errors) == 1
        assert errors[0].field_name == field
        assert errors[0].kind == ErrorKind.REQUIRED

    @pytest.mark.parametrize(
        "field", ["title", "type", "price", "address", "rooms", "checkin", "checkout"]
    )
    def test_absent_key_yields_required_error(self, field):
        data = make_fields()
        del data[field]
        errors = validate_fields(data, RULES)
        assert [(e.field_name, e.kind) for e in errors] == [(field, ErrorKind.REQUIRED)]

    def test_zero_rooms_is_present(self):
        assert validate_rooms(0, RULES) is None

    def test_zero_price_is_present_but_out_of_range(self):
        error = validate_price(0, RULES)
        assert error.kind == ErrorKind.PRICE

    def test_empty_payload_reports_every_required_field(self):
        errors = validate_fields({}, RULES)
        assert [e.field_name for e in errors] == [
            "title", "type", "price", "address", "rooms", "checkin", "checkout",
        ]
        assert set(kinds(errors)) == {ErrorKind.REQUIRED}


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------


class TestTitle:
    def test_valid_title(self):
        assert validate_title(VALID_FIELDS["title"], RULES) is None

    def test_boundary_lengths_are_valid(self):
        assert validate_title("a" * RULES.min_title, RULES) is None
        assert validate_title("a" * RULES.max_title, RULES) is None

    def test_too_short(self):
        assert validate_title("a" * (RULES.min_title - 1), RULES).kind == ErrorKind.TITLE

    def test_too_long(self):
        assert validate_title("a" * (RULES.max_title + 1), RULES).kind == ErrorKind.TITLE

    def test_not_a_string_shares_title_error(self):
        assert validate_title(2222, RULES).kind == ErrorKind.TITLE

    def test_content_does_not_matter(self):
        assert validate_title("!" * 50, RULES) is None


# ---------------------------------------------------------------------------
# Type
# ---------------------------------------------------------------------------


class TestType:
    @pytest.mark.parametrize("value", ["flat", "house", "bungalow", "palace"])
    def test_known_types(self, value):
        assert validate_type(value, RULES) is None

    def test_unknown_type(self):
        assert validate_type("room", RULES).kind == ErrorKind.TYPE

    def test_non_string_type(self):
        assert validate_type(3, RULES).kind == ErrorKind.TYPE


# ---------------------------------------------------------------------------
# Price and rooms
# ---------------------------------------------------------------------------


class TestPrice:
    @pytest.mark.parametrize("value", [1, 30000, 100_000, "30000", " 500 ", 500.0, "500.0"])
    def test_in_range(self, value):
        assert validate_price(value, RULES) is None

    @pytest.mark.parametrize("value", [200_000, 100_001, -5, "i'm thinking about it", True, [1]])
    def test_out_of_range_or_not_numeric(self, value):
        assert validate_price(value, RULES).kind == ErrorKind.PRICE

    def test_nan_and_infinity_rejected(self):
        assert validate_price("nan", RULES).kind == ErrorKind.PRICE
        assert validate_price(float("inf"), RULES).kind == ErrorKind.PRICE

    @pytest.mark.parametrize("value", [30000.5, "99.5"])
    def test_fractional_price_rejected(self, value):
        assert validate_price(value, RULES).kind == ErrorKind.PRICE

    @pytest.mark.parametrize("value", [10**400, -(10**400), "9" * 400, "9" * 400 + ".5"])
    def test_huge_numbers_are_errors_not_crashes(self, value):
        assert validate_price(value, RULES).kind == ErrorKind.PRICE
        assert validate_rooms(value, RULES).kind == ErrorKind.ROOMS

    @pytest.mark.parametrize("value", ["1_000", "1e3", "0x10", "+500", "5.", ".5", "٣٠٠"])
    def test_non_decimal_spellings_rejected(self, value):
        assert validate_price(value, RULES).kind == ErrorKind.PRICE


class TestRooms:
    @pytest.mark.parametrize("value", [0, 1, 1000, "3", 2.0])
    def test_in_range(self, value):
        assert validate_rooms(value, RULES) is None

    @pytest.mark.parametrize("value", [200_000, -1, "i'm thinking about it", 1.5, "1.5"])
    def test_invalid(self, value):
        assert validate_rooms(value, RULES).kind == ErrorKind.ROOMS


class TestGuests:
    def test_absent_is_valid(self):
        assert validate_guests(None, RULES) is None

    def test_numeric_string(self):
        assert validate_guests("4", RULES) is None

    def test_not_numeric(self):
        assert validate_guests("many", RULES).kind == ErrorKind.GUESTS

    def test_negative(self):
        assert validate_guests(-1, RULES).kind == ErrorKind.GUESTS

    def test_fractional(self):
        assert validate_guests(2.5, RULES).kind == ErrorKind.GUESTS

    def test_huge_value_keeps_precision(self):
        assert validate_guests(2**53 + 1, RULES) is None
        assert parse_integer(2**53 + 1) == 2**53 + 1


class TestParseNumber:
    def test_integral_float_becomes_int(self):
        assert parse_number("30000") == 30000
        assert isinstance(parse_number(12.0), int)

    def test_fraction_kept(self):
        assert parse_number("1.5") == 1.5
        assert parse_integer("1.5") is None

    def test_bool_is_not_a_number(self):
        assert parse_number(False) is None

    def test_huge_values_do_not_raise(self):
        assert parse_number(10**400) == 10**400
        assert parse_number("9" * 400 + ".5") is None
        assert parse_number("9" * 5000) is None

    def test_location_with_huge_coordinate(self):
        assert validate_location({"x": 10**400, "y": 1}, RULES) is None
        assert validate_location({"x": "1e999", "y": 1}, RULES).kind == ErrorKind.LOCATION


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


class TestAddress:
    def test_at_limit(self):
        assert validate_address("a" * RULES.max_address_length, RULES) is None

    def test_too_long(self):
        error = validate_address("a" * (RULES.max_address_length + 1), RULES)
        assert error.kind == ErrorKind.ADDRESS

    def test_not_a_string(self):
        assert validate_address(12, RULES).kind == ErrorKind.ADDRESS


# ---------------------------------------------------------------------------
# Checkin / checkout
# ---------------------------------------------------------------------------


class TestTimes:
    @pytest.mark.parametrize("value", ["0:00", "9:00", "09:30", "12:00", "23:59"])
    def test_valid_times(self, value):
        assert validate_checkin(value, RULES) is None
        assert validate_checkout(value, RULES) is None

    @pytest.mark.parametrize("value", ["24:00", "99:99", "12:60", "12", "noon", "12:00pm", "1200"])
    def test_invalid_times(self, value):
        assert validate_checkin(value, RULES).kind == ErrorKind.CHECKIN
        assert validate_checkout(value, RULES).kind == ErrorKind.CHECKOUT

    def test_checkin_and_checkout_report_their_own_field(self):
        errors = validate_fields(make_fields(checkin="99:99", checkout="24:00"), RULES)
        assert [(e.field_name, e.kind) for e in errors] == [
            ("checkin", ErrorKind.CHECKIN),
            ("checkout", ErrorKind.CHECKOUT),
        ]


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class TestFeatures:
    def test_absent_is_valid(self):
        assert validate_features(None, RULES) is None

    def test_single_scalar(self):
        assert validate_features("wifi", RULES) is None

    def test_all_features(self):
        value = ["wifi", "dishwasher", "parking", "washer", "elevator", "conditioner"]
        assert validate_features(value, RULES) is None

    def test_duplicate_entry(self):
        error = validate_features(["wifi", "parking", "wifi"], RULES)
        assert error.kind == ErrorKind.FEATURES

    def test_unknown_entry(self):
        error = validate_features(["wifi", "parking", "coffee"], RULES)
        assert error.kind == ErrorKind.FEATURES

    def test_unknown_scalar(self):
        assert validate_features("coffee", RULES).kind == ErrorKind.FEATURES

    def test_non_string_entry(self):
        assert validate_features([{"wifi": True}], RULES).kind == ErrorKind.FEATURES


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------


class TestLocation:
    def test_absent_is_valid(self):
        assert validate_location(None, RULES) is None

    def test_numeric_coordinates(self):
        assert validate_location({"x": 570, "y": "472.5"}, RULES) is None

    def test_missing_coordinate(self):
        assert validate_location({"x": 570}, RULES).kind == ErrorKind.LOCATION

    def test_not_a_mapping(self):
        assert validate_location("570, 472", RULES).kind == ErrorKind.LOCATION


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class TestValidateFields:
    def test_valid_fields_have_no_errors(self):
        assert validate_fields(make_fields(), RULES) == []

    def test_errors_are_collected_in_schema_order(self):
        errors = validate_fields(
            make_fields(features=["wifi", "wifi"], price="abc", title="", type="room"),
            RULES,
        )
        assert [(e.field_name, e.kind) for e in errors] == [
            ("title", ErrorKind.REQUIRED),
            ("type", ErrorKind.TYPE),
            ("price", ErrorKind.PRICE),
            ("features", ErrorKind.FEATURES),
        ]

    def test_unknown_fields_are_ignored(self):
        assert validate_fields(make_fields(feature="coffee", _id="x"), RULES) == []

    def test_name_never_errors(self):
        assert validate_fields(make_fields(name=42), RULES) == []

    def test_custom_rules_are_applied(self):
        rules = OfferRules(max_price=1000)
        errors = validate_fields(make_fields(price=30000), rules)
        assert kinds(errors) == [ErrorKind.PRICE]
