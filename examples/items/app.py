"""Items — the built-in stages.

A tiny in-memory item store: ``POST /items`` creates from a JSON body,
``GET /items/{id:int}`` reads one back. Uses ``JSONBodyModel``,
``PathParamsModel``, ``RulesValidator`` and ``JSONWriter`` instead of
hand-written stages.

Run:
    python app.py
"""

import threading
from dataclasses import dataclass

from ghost import NotFound, Router
from ghost.pipeline import JSONBodyModel, JSONWriter, PathParamsModel, RulesValidator
from ghost.validation import max_length, min_value, required


class ItemStore:
    def __init__(self) -> None:
        self._items: dict[int, dict] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, title: str, done: bool) -> dict:
        with self._lock:
            item = {"id": self._next_id, "title": title, "done": done}
            self._items[self._next_id] = item
            self._next_id += 1
            return item

    def get(self, item_id: int) -> dict | None:
        with self._lock:
            return self._items.get(item_id)


@dataclass(frozen=True, slots=True)
class NewItem:
    title: str
    done: bool = False


@dataclass(frozen=True, slots=True)
class ItemId:
    id: int


class CreateItem:
    def __init__(self, store: ItemStore) -> None:
        self.store = store

    async def process(self, model: NewItem) -> dict:
        return self.store.add(model.title, model.done)


class GetItem:
    def __init__(self, store: ItemStore) -> None:
        self.store = store

    def process(self, model: ItemId) -> dict:
        item = self.store.get(model.id)
        if item is None:
            raise NotFound(f"Item {model.id} not found")
        return item


store = ItemStore()
router = Router()

router.add_route("/items") \
    .methods("POST") \
    .name("create_item") \
    .model(JSONBodyModel(NewItem)) \
    .validator(RulesValidator({"title": [required, max_length(80)]})) \
    .processor(CreateItem(store)) \
    .writer(JSONWriter())

router.add_route("/items/{id:int}") \
    .methods("GET") \
    .name("get_item") \
    .model(PathParamsModel(ItemId)) \
    .validator(RulesValidator({"id": [min_value(1)]})) \
    .processor(GetItem(store)) \
    .writer(JSONWriter())

if __name__ == "__main__":
    router.run()
