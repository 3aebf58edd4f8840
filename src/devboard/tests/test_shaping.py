import pytest

from devboard.colors import STACKED_PALETTE
from devboard.models import StackedBarPrimitive
from devboard.shaping import (
    bar_title,
    format_uptime,
    shape_bar,
    shape_stacked_bar,
    shape_table,
    title_case,
    truncate_label,
)

HEADERS = ["Page", "Sessions", "Page views"]
LABELS = ["/a/", "/b/", "/c/", "/d/", "/e/"]
VALUES = [[5, 6], [4, 5], [3, 4], [2, 3], [1, 2]]


def test_table_keeps_header_and_limits_rows():
    table = shape_table(3, LABELS, VALUES, 20, HEADERS)

    assert len(table.rows) == 4
    assert table.header == ("Page", "Sessions", "Page views")
    assert table.body == (("/a/", "5", "6"), ("/b/", "4", "5"), ("/c/", "3", "4"))


def test_table_with_fewer_rows_than_limit():
    table = shape_table(10, LABELS[:2], VALUES[:2], 20, HEADERS)
    assert len(table.rows) == 3


def test_table_with_zero_row_limit_is_header_only():
    table = shape_table(0, LABELS, VALUES, 20, HEADERS)
    assert table.rows == (tuple(HEADERS),)


def test_table_truncates_dimension_labels():
    table = shape_table(1, ["  /a-very-long-page-path/  "], [[1]], 6, ["Page", "Sessions"])
    assert table.body == (("/a-ver", "1"),)


def test_truncation_is_idempotent():
    once = truncate_label("  /blog/some-article/ ", 8)
    assert once == "/blog/so"
    assert truncate_label(once, 8) == once


@pytest.mark.parametrize(
    "text, expected",
    [
        ("sessions", "Sessions"),
        ("page_views", "Page_views"),
        ("new visitor", "New Visitor"),
        ("", ""),
    ],
)
def test_title_case(text, expected):
    assert title_case(text) == expected


def test_bar_title():
    assert bar_title("sessions", "day") == "Sessions per day"


def test_shape_bar_keeps_order():
    bar = shape_bar(["01 Jan", "02 Jan"], ["10", 20])
    assert bar.values == (10, 20)
    assert bar.labels == ("01 Jan", "02 Jan")


def test_stacked_bar_title_lists_series_with_colors():
    series = {"New Visitor": [1, 2], "Returning Visitor": [3, 4]}
    primitive, title = shape_stacked_bar("sessions", series, ["01 Jan", "02 Jan"], STACKED_PALETTE)

    assert title == "Sessions - New Visitor (blue) / Returning Visitor (green)"
    assert primitive.series == (("New Visitor", (1, 2)), ("Returning Visitor", (3, 4)))
    assert primitive.colors == ("blue", "green")


def test_stacked_bar_without_series_keeps_metric_title():
    primitive, title = shape_stacked_bar("users", {}, [], STACKED_PALETTE)
    assert title == "Users"
    assert primitive.series == ()


def test_stacked_bar_is_capped_at_eight_series():
    series = {f"s{index}": [index] for index in range(10)}
    primitive, title = shape_stacked_bar("sessions", series, ["01 Jan"], STACKED_PALETTE)

    assert [name for name, _ in primitive.series] == [f"s{index}" for index in range(8)]
    assert primitive.colors == ("blue", "green", "yellow", "red", "magenta", "default", "default", "default")
    assert "s8" not in title


def test_stacked_primitive_rejects_more_than_eight_series():
    series = tuple((f"s{index}", (1,)) for index in range(9))
    with pytest.raises(ValueError):
        StackedBarPrimitive(series=series, labels=("01 Jan",), colors=("default",) * 9)


def test_stacked_primitive_requires_aligned_colors():
    with pytest.raises(ValueError):
        StackedBarPrimitive(series=(("a", (1,)),), labels=("01 Jan",), colors=())


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0s"),
        (59, "59s"),
        (61, "1m 1s"),
        (3600, "1h 0m 0s"),
        (86400, "24h 0m 0s"),
        (86401, "1d 1s"),
        (90061, "1d 1h 1m 1s"),
        (2 * 86400 + 3 * 3600 + 4 * 60 + 5, "2d 3h 4m 5s"),
        (-5, "0s"),
        (2 * 86400, "1d 24h 0m 0s"),
        (10**6 * 86400 + 1, "1000000d 1s"),
    ],
)
def test_format_uptime(seconds, expected):
    assert format_uptime(seconds) == expected
