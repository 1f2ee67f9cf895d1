"""
Tests for the ProductCode entity itself, without storage.
"""

import pytest

from prodcode import ProductCode, StorageError


class TestProductCodeFields:
    """Test construction and accessors."""

    @pytest.mark.parametrize("code, discount_code, description", [
        ("MO", "N", "Movies"),
        ("SW", "M", "Software"),
        ("X", "L", ""),
    ])
    def test_fields_read_back(self, code, discount_code, description):
        """Test constructed values are returned unchanged."""
        product = ProductCode(code, discount_code, description)

        assert product.code == code
        assert product.discount_code == discount_code
        assert product.description == description
        assert product.previous_code is None

    def test_setters(self):
        """Test discount code and description can be changed."""
        product = ProductCode("MO", "N", "Movies")
        product.discount_code = "H"
        product.description = "Motion pictures"

        assert product.discount_code == "H"
        assert product.description == "Motion pictures"
        assert product.previous_code is None

    def test_none_code_rejected(self):
        """Test code can never be None."""
        with pytest.raises(ValueError):
            ProductCode(None, "N", "Movies")

        product = ProductCode("MO", "N", "Movies")
        with pytest.raises(ValueError):
            product.code = None
        assert product.code == "MO"
        assert product.previous_code is None

    @pytest.mark.parametrize("discount_code", ["", "NN", None])
    def test_discount_code_must_be_one_character(self, discount_code):
        """Test discount code must be exactly one character."""
        with pytest.raises(ValueError):
            ProductCode("MO", discount_code, "Movies")

    def test_to_row(self):
        """Test column order of statement parameters."""
        assert ProductCode("MO", "N", "Movies").to_row() == ("MO", "N", "Movies")


class TestProductCodeRename:
    """Test previous_code tracking."""

    def test_rename_records_previous_code(self):
        """Test renaming remembers the old code."""
        product = ProductCode("MO", "N", "Movies")
        product.code = "MV"

        assert product.code == "MV"
        assert product.previous_code == "MO"

    def test_each_rename_records_its_prior_value(self):
        """Test previous_code follows the latest rename."""
        product = ProductCode("MO", "N", "Movies")
        product.code = "MV"
        product.code = "MX"

        assert product.previous_code == "MV"

    def test_other_setters_do_not_touch_previous_code(self):
        product = ProductCode("MO", "N", "Movies")
        product.code = "MV"
        product.description = "Film"

        assert product.previous_code == "MO"


class TestProductCodeEquality:
    """Test the loose code-or-description equality."""

    def test_same_code_is_equal(self):
        """Test matching codes compare equal whatever the other fields."""
        assert ProductCode("MO", "N", "Movies") == ProductCode("MO", "H", "Films")

    def test_same_description_is_equal(self):
        """Test matching descriptions compare equal across different codes."""
        assert ProductCode("MO", "N", "Movies") == ProductCode("MV", "H", "Movies")

    def test_different_code_and_description_not_equal(self):
        assert ProductCode("MO", "N", "Movies") != ProductCode("SW", "N", "Software")

    def test_not_equal_to_other_types(self):
        assert ProductCode("MO", "N", "Movies") != "MO"

    def test_membership_uses_loose_equality(self):
        """Test `in` finds a row by either field."""
        rows = [ProductCode("MO", "N", "Movies"), ProductCode("SW", "M", "Software")]

        assert ProductCode("MV", "N", "Movies") in rows
        assert ProductCode("SW", "L", "Other") in rows
        assert ProductCode("HW", "L", "Hardware") not in rows

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(ProductCode("MO", "N", "Movies"))


class TestProductCodeRendering:
    """Test text rendering."""

    def test_str_is_code(self):
        assert str(ProductCode("MO", "N", "Movies")) == "MO"

    def test_repr_shows_fields(self):
        text = repr(ProductCode("MO", "N", "Movies"))
        assert "MO" in text
        assert "'N'" in text
        assert "Movies" in text


class TestProductCodeFromRow:
    """Test conversion from persisted rows."""

    def test_from_row(self):
        product = ProductCode.from_row(
            {"prod_code": "MO", "discount_code": "N", "description": "Movies"}
        )

        assert product.code == "MO"
        assert product.discount_code == "N"
        assert product.description == "Movies"
        assert product.previous_code is None

    def test_from_row_takes_first_character_of_discount_code(self):
        """Test padded CHAR columns still give one character."""
        product = ProductCode.from_row(
            {"prod_code": "MO", "discount_code": "N ", "description": "Movies"}
        )
        assert product.discount_code == "N"

    def test_from_row_missing_column(self):
        with pytest.raises(StorageError):
            ProductCode.from_row({"prod_code": "MO", "description": "Movies"})

    def test_from_row_empty_column(self):
        with pytest.raises(StorageError):
            ProductCode.from_row(
                {"prod_code": "MO", "discount_code": "", "description": "Movies"}
            )

    def test_convert(self):
        rows = [
            {"prod_code": "MO", "discount_code": "N", "description": "Movies"},
            {"prod_code": "SW", "discount_code": "M", "description": "Software"},
        ]
        assert [str(code) for code in ProductCode.convert(rows)] == ["MO", "SW"]
