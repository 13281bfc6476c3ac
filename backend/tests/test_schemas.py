import pytest

from schemas.product import (
    ProductForm,
    ProductOut,
    is_supplied,
    to_number_or_none,
    to_quantity_or_none,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("129.50", 129.5),
        (" 12 ", 12.0),
        (7, 7.0),
        ("", None),
        (None, None),
        ("abc", None),
        ("inf", None),
        ("nan", None),
    ],
)
def test_to_number_or_none(raw, expected):
    assert to_number_or_none(raw) == expected


def test_quantity_rounds_half_up():
    assert to_quantity_or_none("10") == 10
    assert to_quantity_or_none("2.5") == 3
    assert to_quantity_or_none("2.4") == 2
    assert to_quantity_or_none("x") is None


def test_is_supplied():
    assert not is_supplied(None)
    assert not is_supplied("")
    assert is_supplied("0")
    assert is_supplied(0)


class TestProductForm:
    def test_alias_priority(self):
        form = ProductForm.model_validate(
            {"name": "c", "Name": "b", "Tic_Jum_Name": "a", "Quantity": "2", "quantity": "9"}
        )
        assert form.name == "a"
        assert form.quantity == "2"
        assert form.price is None
        assert form.image is None

    def test_unknown_keys_are_ignored(self):
        form = ProductForm.model_validate({"name": "Butter", "colour": "yellow"})
        assert form.name == "Butter"

    def test_clean_name(self):
        assert ProductForm.model_validate({"name": "  Ghee  "}).clean_name() == "Ghee"
        assert ProductForm.model_validate({"name": "   "}).clean_name() is None
        assert ProductForm.model_validate({}).clean_name() is None


def test_product_out_serializes_image_url_camel_case():
    out = ProductOut(id=1, name="Butter", image_url="http://x/1.jpg")
    assert out.model_dump(by_alias=True) == {
        "id": 1,
        "name": "Butter",
        "price": None,
        "quantity": None,
        "imageUrl": "http://x/1.jpg",
    }
