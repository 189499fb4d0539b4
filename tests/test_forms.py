import pytest

from errors import ValidationError
from forms import parse_positive_int, parse_product_form, parse_product_id
from models.product import SortOrder


@pytest.mark.parametrize("value,expected", [
    ("3", 3),
    ("1", 1),
    ("0", 10),
    ("-2", 10),
    ("abc", 10),
    ("", 10),
    (None, 10),
    ("99999999999999999999", 10),
    ("9223372036854775808", 10),
    ("9223372036854775807", 9223372036854775807),
    ("1_0", 10),
    (" 3", 10),
    ("3\n", 10),
    ("\u0663", 10),
])
def test_parse_positive_int_defaults_on_invalid(value, expected):
    assert parse_positive_int(value, 10) == expected


@pytest.mark.parametrize("value,expected", [("12", 12), ("+7", 7), ("-3", -3)])
def test_parse_product_id(value, expected):
    assert parse_product_id(value) == expected


@pytest.mark.parametrize("value", [
    "abc", "1.5", "", " 4", "1_000", None,
    "1\n", "\u0661", "99999999999999999999", "-9223372036854775809",
])
def test_parse_product_id_rejects_non_integers(value):
    with pytest.raises(ValidationError):
        parse_product_id(value)


def test_parse_product_form():
    form = {"name": "Tee", "size": "m", "price": "19.99"}
    assert parse_product_form(form) == ("Tee", "m", 19.99)


def test_parse_product_form_keeps_values_as_submitted():
    form = {"name": "  Tee  ", "size": " m", "price": "19.99"}
    assert parse_product_form(form) == ("  Tee  ", " m", 19.99)



@pytest.mark.parametrize("form", [
    {"size": "m", "price": "1"},
    {"name": "Tee", "size": "  ", "price": "1"},
    {"name": "Tee", "size": "m", "price": "cheap"},
    {"name": "Tee", "size": "m", "price": "nan"},
])
def test_parse_product_form_rejects_bad_input(form):
    with pytest.raises(ValidationError):
        parse_product_form(form)


@pytest.mark.parametrize("value,expected", [
    ("size", SortOrder.SIZE),
    ("Price", SortOrder.PRICE),
    ("name", SortOrder.NAME),
    ("", SortOrder.DEFAULT),
    (None, SortOrder.DEFAULT),
    ("id; DROP TABLE products", SortOrder.DEFAULT),
])
def test_sort_order_parse(value, expected):
    assert SortOrder.parse(value) is expected
