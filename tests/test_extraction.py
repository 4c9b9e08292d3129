"""Tests for ghost.extraction — typed dataclass extraction."""

from dataclasses import dataclass, field

import pytest

from ghost.extraction import ExtractionError, extract_dataclass, is_extractable_dataclass


@dataclass(frozen=True, slots=True)
class Item:
    title: str
    qty: int = 1
    price: float = 0.0
    urgent: bool = False
    tags: list[str] = field(default_factory=list)


class TestExtractDataclass:
    def test_converts_types(self) -> None:
        item = extract_dataclass(
            Item, {"title": "Milk", "qty": "3", "price": "1.5", "urgent": "yes"}
        )
        assert item == Item(title="Milk", qty=3, price=1.5, urgent=True)

    def test_defaults_used(self) -> None:
        item = extract_dataclass(Item, {"title": "Milk"})
        assert item.qty == 1
        assert item.tags == []

    def test_strings_kept_as_sent(self) -> None:
        assert extract_dataclass(Item, {"title": "  Milk  "}).title == "  Milk  "

    def test_unknown_keys_ignored(self) -> None:
        assert extract_dataclass(Item, {"title": "Milk", "extra": 1}).title == "Milk"

    def test_unknown_annotation_passes_raw(self) -> None:
        item = extract_dataclass(Item, {"title": "Milk", "tags": ["a", "b"]})
        assert item.tags == ["a", "b"]

    def test_missing_required(self) -> None:
        with pytest.raises(ExtractionError, match="Missing required field 'title'") as info:
            extract_dataclass(Item, {})
        assert info.value.field == "title"

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ({"title": "a", "qty": "lots"}, "Field 'qty' must be an integer"),
            ({"title": "a", "qty": 1.5}, "Field 'qty' must be an integer"),
            ({"title": "a", "qty": True}, "Field 'qty' must be an integer"),
            ({"title": "a", "price": "cheap"}, "Field 'price' must be a number"),
            ({"title": "a", "urgent": "maybe"}, "Field 'urgent' must be a boolean"),
            ({"title": ["a"]}, "Field 'title' must be a string"),
        ],
    )
    def test_conversion_errors(self, data: dict, message: str) -> None:
        with pytest.raises(ExtractionError, match=message):
            extract_dataclass(Item, data)

    def test_extraction_error_is_value_error(self) -> None:
        assert issubclass(ExtractionError, ValueError)


class TestIsExtractableDataclass:
    def test_user_dataclass(self) -> None:
        assert is_extractable_dataclass(Item)

    def test_instance_is_not(self) -> None:
        assert not is_extractable_dataclass(Item(title="x"))

    def test_plain_class_is_not(self) -> None:
        assert not is_extractable_dataclass(dict)
