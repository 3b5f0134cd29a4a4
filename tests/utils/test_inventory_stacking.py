import pytest

from evovac.components import Inventory
from evovac.types import Rarity
from evovac.utils.inventory import add_item, item_count, remove_item, total_items, total_value
from tests.test_utils import make_archetype


def test_same_archetype_stacks() -> None:
    can = make_archetype("Can", sell_value=2)
    inv = add_item(add_item(Inventory(), can), can, quantity=2)
    assert item_count(inv, "Can") == 3
    assert len(inv.entries) == 1


def test_remove_partial_and_whole_stack() -> None:
    can = make_archetype("Can")
    inv = add_item(Inventory(), can, quantity=3)
    inv, removed = remove_item(inv, "Can", 2)
    assert removed == 2
    assert item_count(inv, "Can") == 1
    inv, removed = remove_item(inv, "Can", 5)
    assert removed == 1
    assert "Can" not in inv.entries


def test_remove_unknown_is_noop() -> None:
    inv = Inventory()
    after, removed = remove_item(inv, "Ghost")
    assert removed == 0
    assert after == inv


def test_totals() -> None:
    can = make_archetype("Can", sell_value=2)
    radio = make_archetype("Radio", rarity=Rarity.EPIC, sell_value=60)
    inv = add_item(add_item(Inventory(), can, quantity=4), radio)
    assert total_items(inv) == 5
    assert total_value(inv) == 68


def test_non_positive_quantity_rejected() -> None:
    with pytest.raises(ValueError):
        add_item(Inventory(), make_archetype(), quantity=0)
    with pytest.raises(ValueError):
        remove_item(Inventory(), "Can", quantity=-1)
