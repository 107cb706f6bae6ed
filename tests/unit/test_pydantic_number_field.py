"""
Тесты Number как поля Pydantic моделей

Проверяет:
1. Валидацию из строки (разрешающий разбор), примитива и Number
2. ValidationError для неразбираемых значений
3. Сериализацию в собственный текстовый формат представления
"""

import pytest
from pydantic import BaseModel, ValidationError

from src.polynum.domain.kind import NumberKind
from src.polynum.domain.number import Number
from src.polynum.math.fraction import GenericFraction
from src.polynum.math.standard_form import StandardForm


class Ingredient(BaseModel):
    """Тестовая модель с числовым полем"""

    name: str
    quantity: Number

    model_config = {"frozen": True}


class TestValidation:

    def test_from_fraction_string(self):
        item = Ingredient(name="flour", quantity="2/3")
        assert item.quantity.kind is NumberKind.FRACTION
        assert item.quantity.value == GenericFraction.new(2, 3)

    def test_from_standard_form_string(self):
        item = Ingredient(name="yeast", quantity="1*10^-3")
        assert item.quantity.value == StandardForm.new(1.0, -3)

    def test_from_primitive(self):
        assert Ingredient(name="salt", quantity=1.5).quantity == Number.decimal(1.5)
        assert Ingredient(name="eggs", quantity=2).quantity.kind is NumberKind.DECIMAL

    def test_from_number_instance(self):
        quantity = Number.fraction(GenericFraction.new(1, 2))
        assert Ingredient(name="milk", quantity=quantity).quantity is quantity

    def test_unparsable_string(self):
        with pytest.raises(ValidationError):
            Ingredient(name="sugar", quantity="a pinch")

    def test_unsupported_type(self):
        with pytest.raises(ValidationError):
            Ingredient(name="sugar", quantity=[1, 2])


class TestSerialization:

    def test_model_dump(self):
        item = Ingredient(name="flour", quantity="2/3")
        assert item.model_dump() == {"name": "flour", "quantity": "2/3"}

    def test_model_dump_json(self):
        item = Ingredient(name="yeast", quantity="1.5*10^3")
        assert item.model_dump_json() == '{"name":"yeast","quantity":"1.5*10^3"}'

    def test_json_round_trip(self):
        item = Ingredient(name="flour", quantity="-4/5")
        restored = Ingredient.model_validate_json(item.model_dump_json())
        assert restored == item
