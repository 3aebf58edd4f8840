from datetime import date

import pytest

from devboard.errors import InvalidOptionValue
from devboard.models import DateRange
from devboard.options import (
    extract_bool,
    extract_colors,
    extract_dimensions,
    extract_filters,
    extract_int,
    extract_list,
    extract_metric,
    extract_orders,
    extract_time_period,
    extract_time_range,
    extract_title,
    overlay,
)


def test_metric_defaults_to_sessions():
    assert extract_metric({}) == "sessions"
    assert extract_metric({"metric": "users"}) == "users"


def test_dimensions_are_split_and_trimmed():
    assert extract_dimensions({"dimensions": " country , city"}) == ["country", "city"]


def test_empty_dimensions_yield_empty_list():
    assert extract_dimensions({}) == []
    assert extract_dimensions({"dimensions": ""}) == []
    assert extract_dimensions({"dimensions": " , "}) == []


def test_filters_and_generic_lists():
    assert extract_filters({}) == []
    assert extract_filters({"filters": "/home/"}) == ["/home/"]
    assert extract_list({}, "metrics", default=("a", "b")) == ["a", "b"]
    assert extract_list({"metrics": "users"}, "metrics", default=("a", "b")) == ["users"]


def test_orders_default_to_primary_metric_descending():
    assert extract_orders({}, "page_views") == ["page_views desc"]
    assert extract_orders({"order": "users asc, sessions desc"}, "page_views") == ["users asc", "sessions desc"]


def test_time_period():
    assert extract_time_period({}) == "day"
    assert extract_time_period({"time_period": " month "}) == "month"


@pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
def test_bool_true_spellings(value):
    assert extract_bool({"global": value}, "global") is True


@pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
def test_bool_false_spellings(value):
    assert extract_bool({"global": value}, "global") is False


def test_absent_bool_is_false():
    assert extract_bool({}, "global") is False


def test_invalid_bool_names_option_and_value():
    with pytest.raises(InvalidOptionValue) as excinfo:
        extract_bool({"global": "yes"}, "global")
    assert excinfo.value.option == "global"
    assert excinfo.value.value == "yes"
    assert "global" in str(excinfo.value) and "yes" in str(excinfo.value)


def test_int_limits():
    assert extract_int({}, "row_limit", 5) == 5
    assert extract_int({"row_limit": "12"}, "row_limit", 5) == 12
    assert extract_int({"char_limit": " 30 "}, "char_limit", 20) == 30


@pytest.mark.parametrize("value", ["abc", "", "1.5", "-1"])
def test_invalid_int_limits(value):
    with pytest.raises(InvalidOptionValue) as excinfo:
        extract_int({"row_limit": value}, "row_limit", 5)
    assert excinfo.value.option == "row_limit"


def test_explicit_title_wins():
    assert extract_title({}, "Sessions per day") == "Sessions per day"
    assert extract_title({"title": "Traffic"}, "Sessions per day") == "Traffic"
    assert extract_title({"title": ""}, "Sessions per day") == ""


def test_overlay_returns_new_mapping():
    options = {"metric": "sessions", "title": "Mine"}
    merged = overlay(options, {"metric": "users", "dimensions": "user_type"})

    assert merged == {"metric": "users", "dimensions": "user_type", "title": "Mine"}
    assert options == {"metric": "sessions", "title": "Mine"}
    with pytest.raises(TypeError):
        merged["metric"] = "bounces"


def test_colors_default_palette_and_overrides():
    assert extract_colors({}) == ["blue", "green", "yellow", "red", "magenta"]
    colors = extract_colors({"second_color": "cyan", "fifth_color": "no-such-color"})
    assert colors == ["blue", "cyan", "yellow", "red", "default"]


def test_time_range_defaults_to_last_seven_days():
    now = date(2019, 1, 15)
    assert extract_time_range(now, {}) == DateRange(date(2019, 1, 8), now)
    assert extract_time_range(now, {"start_date": "this_month"}) == DateRange(date(2019, 1, 1), now)
