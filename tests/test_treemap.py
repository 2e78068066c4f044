import math
import random

import pytest

from finanzas_hogar.treemap import TreeMap


def lt(a, b):
    return a < b


def case_insensitive(a, b):
    return a.lower() < b.lower()


def avl_limit(n):
    return 1.45 * math.log2(n + 2)


def test_empty_map():
    tree = TreeMap(lt)
    assert len(tree) == 0
    assert tree.height() == 0
    assert list(tree.items()) == []
    assert tree.search(1) is None
    assert tree.upper_bound(1) is None
    assert 1 not in tree


def test_items_are_sorted():
    tree = TreeMap(lt)
    keys = list(range(200))
    random.Random(7).shuffle(keys)
    for k in keys:
        tree.insert(k, str(k))
    assert list(tree) == sorted(keys)
    assert list(tree.items()) == [(k, str(k)) for k in sorted(keys)]
    assert len(tree) == len(keys)


def test_duplicate_insert_keeps_first_value():
    tree = TreeMap(lt)
    assert tree.insert("a", 1) is True
    assert tree.insert("a", 2) is False
    assert tree.search("a") == ("a", 1)
    assert len(tree) == 1


def test_equality_follows_comparator():
    tree = TreeMap(case_insensitive)
    tree.insert("Enero", 1)
    assert tree.insert("ENERO", 5) is False
    assert tree.search("enero") == ("Enero", 1)
    assert "eNeRo" in tree


def test_sequential_inserts_stay_balanced():
    tree = TreeMap(lt)
    for k in range(1024):
        tree.insert(k, k)
        assert tree.height() <= avl_limit(len(tree))
    assert list(tree) == list(range(1024))


def test_erase_present_and_missing():
    tree = TreeMap(lt)
    for k in range(10):
        tree.insert(k, k * k)
    assert tree.erase(4) is True
    assert tree.erase(4) is False
    assert tree.search(4) is None
    assert list(tree) == [0, 1, 2, 3, 5, 6, 7, 8, 9]
    assert len(tree) == 9


def test_erase_keeps_order_and_balance():
    rng = random.Random(3)
    tree = TreeMap(lt)
    keys = rng.sample(range(5000), 500)
    for k in keys:
        tree.insert(k, -k)
    remaining = set(keys)
    for k in rng.sample(keys, 300):
        assert tree.erase(k) is True
        remaining.discard(k)
        assert tree.height() <= avl_limit(len(tree))
    assert list(tree) == sorted(remaining)
    assert all(tree.search(k) == (k, -k) for k in remaining)


def test_erase_all_empties_tree():
    tree = TreeMap(lt)
    for k in range(50):
        tree.insert(k, None)
    for k in range(50):
        tree.erase(k)
    assert len(tree) == 0
    assert tree.height() == 0
    assert list(tree) == []


@pytest.mark.parametrize(
    "query, expected",
    [(10, (10, "x10")), (11, (20, "x20")), (0, (10, "x10")), (29, (30, "x30")), (31, None)],
)
def test_upper_bound(query, expected):
    tree = TreeMap(lt)
    for k in (30, 10, 20):
        tree.insert(k, f"x{k}")
    assert tree.upper_bound(query) == expected