"""Tests for CSV order parsing and grouping."""

import pytest

from tally.core.exceptions import ValidationError
from tally.domain.csv_orders import ImportLine, parse_order_csv, parse_qty, read_rows

HEADER = "external_id,channel,customer_name,sku,qty\n"


class TestParseOrderCsv:

    def test_rows_grouped_by_channel_and_external_id(self):
        text = HEADER + "ORDER1,SHOPIFY,Ana Ruiz,SKU-1,2\nORDER1,SHOPIFY,Ana Ruiz,SKU-2,1\n"
        groups = parse_order_csv(text)

        assert len(groups) == 1
        assert groups[0].key == ("SHOPIFY", "ORDER1")
        assert groups[0].customer_name == "Ana Ruiz"
        assert groups[0].lines == [ImportLine("SKU-1", 2), ImportLine("SKU-2", 1)]

    def test_same_external_id_on_other_channel_is_another_order(self):
        text = HEADER + "1001,SHOPIFY,Ana,SKU-1,1\n1001,ETSY,Bo,SKU-1,1\n"
        groups = parse_order_csv(text)
        assert [group.key for group in groups] == [("SHOPIFY", "1001"), ("ETSY", "1001")]

    def test_headers_are_case_and_space_insensitive(self):
        text = " External_ID , CHANNEL,Customer_Name , SKU,Qty\nORDER1,SHOPIFY,Ana,SKU-1,3\n"
        groups = parse_order_csv(text)
        assert groups[0].lines == [ImportLine("SKU-1", 3)]

    def test_cells_are_trimmed(self):
        groups = parse_order_csv(HEADER + " ORDER1 , SHOPIFY , Ana , SKU-1 , 2 \n")
        assert groups[0].key == ("SHOPIFY", "ORDER1")
        assert groups[0].lines == [ImportLine("SKU-1", 2)]

    def test_extra_columns_ignored(self):
        text = "external_id,channel,customer_name,sku,qty,note\nORDER1,SHOPIFY,Ana,SKU-1,1,gift\n"
        assert len(parse_order_csv(text)) == 1

    def test_byte_order_mark_stripped(self):
        groups = parse_order_csv("\ufeff" + HEADER + "ORDER1,SHOPIFY,Ana,SKU-1,1\n")
        assert groups[0].external_id == "ORDER1"

    def test_rows_missing_keys_are_skipped(self):
        text = (
            HEADER
            + ",SHOPIFY,Ana,SKU-1,1\n"
            + "ORDER2,,Ana,SKU-1,1\n"
            + "ORDER3,SHOPIFY,Ana,,1\n"
            + "ORDER4,SHOPIFY,Ana,SKU-1,1\n"
        )
        groups = parse_order_csv(text)
        assert [group.external_id for group in groups] == ["ORDER4"]

    def test_short_rows_are_padded(self):
        groups = parse_order_csv(HEADER + "ORDER1,SHOPIFY,Ana,SKU-1\n")
        assert groups[0].lines == [ImportLine("SKU-1", 1)]

    def test_first_non_empty_customer_name_wins(self):
        text = HEADER + "ORDER1,SHOPIFY,,SKU-1,1\nORDER1,SHOPIFY,Bo,SKU-2,1\nORDER1,SHOPIFY,Cy,SKU-3,1\n"
        assert parse_order_csv(text)[0].customer_name == "Bo"

    def test_quoted_fields(self):
        text = HEADER + 'ORDER1,SHOPIFY,"Ruiz, Ana",SKU-1,1\n'
        assert parse_order_csv(text)[0].customer_name == "Ruiz, Ana"

    def test_blank_lines_ignored(self):
        text = HEADER + "\nORDER1,SHOPIFY,Ana,SKU-1,1\n\n"
        assert len(parse_order_csv(text)) == 1

    def test_header_only(self):
        assert parse_order_csv(HEADER) == []


class TestCsvErrors:

    def test_missing_columns_named(self):
        with pytest.raises(ValidationError) as exc_info:
            read_rows("external_id,channel,sku\nORDER1,SHOPIFY,SKU-1\n")
        assert "customer_name" in str(exc_info.value)
        assert "qty" in str(exc_info.value)

    def test_empty_file(self):
        with pytest.raises(ValidationError):
            read_rows("")

    def test_unterminated_quote(self):
        with pytest.raises(ValidationError):
            read_rows(HEADER + 'ORDER1,SHOPIFY,"Ana,SKU-1,1\n')


@pytest.mark.parametrize(
    "raw,expected",
    [("3", 3), (" 2 ", 2), ("0", 1), ("-4", 1), ("abc", 1), ("", 1), (None, 1), ("1.5", 1)],
)
def test_parse_qty(raw, expected):
    assert parse_qty(raw) == expected
