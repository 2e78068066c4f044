"""Ordered map backed by an AVL tree with a user-supplied ordering."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

LowerThan = Callable[[Any, Any], Any]


class _Node:
    __slots__ = ("key", "value", "left", "right", "height")

    def __init__(self, key: Any, value: Any) -> None:
        self.key = key
        self.value = value
        self.left: _Node | None = None
        self.right: _Node | None = None
        self.height = 1


def _height(node: _Node | None) -> int:
    return node.height if node is not None else 0


def _update(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance(node: _Node | None) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _rotate_right(y: _Node) -> _Node:
    x = y.left
    assert x is not None
    y.left = x.right
    x.right = y
    _update(y)
    _update(x)
    return x


def _rotate_left(x: _Node) -> _Node:
    y = x.right
    assert y is not None
    x.right = y.left
    y.left = x
    _update(x)
    _update(y)
    return y


def _rebalance(node: _Node) -> _Node:
    _update(node)
    balance = _balance(node)
    if balance > 1:
        if _balance(node.left) < 0:
            node.left = _rotate_left(node.left)  # type: ignore[arg-type]
        return _rotate_right(node)
    if balance < -1:
        if _balance(node.right) > 0:
            node.right = _rotate_right(node.right)  # type: ignore[arg-type]
        return _rotate_left(node)
    return node


def _pop_min(node: _Node) -> tuple[_Node | None, _Node]:
    if node.left is None:
        return node.right, node
    node.left, smallest = _pop_min(node.left)
    return _rebalance(node), smallest


class TreeMap:
    """A sorted key/value map.

    Keys are ordered by ``lower_than(a, b)``, which must be truthy when ``a``
    sorts before ``b``. Two keys are the same key when neither is lower than
    the other.
    """

    def __init__(self, lower_than: LowerThan) -> None:
        self._lower_than = lower_than
        self._root: _Node | None = None
        self._size = 0

    def _lt(self, a: Any, b: Any) -> bool:
        return bool(self._lower_than(a, b))

    def _find(self, key: Any) -> _Node | None:
        node = self._root
        while node is not None:
            if self._lt(key, node.key):
                node = node.left
            elif self._lt(node.key, key):
                node = node.right
            else:
                return node
        return None

    def insert(self, key: Any, value: Any) -> bool:
        """Add ``key`` with ``value``; an existing equal key is left untouched.

        Returns whether the key was added.
        """

        def _insert(node: _Node | None) -> tuple[_Node, bool]:
            if node is None:
                return _Node(key, value), True
            if self._lt(key, node.key):
                node.left, added = _insert(node.left)
            elif self._lt(node.key, key):
                node.right, added = _insert(node.right)
            else:
                return node, False
            return _rebalance(node), added

        self._root, added = _insert(self._root)
        if added:
            self._size += 1
        return added

    def search(self, key: Any) -> tuple[Any, Any] | None:
        """Return the stored ``(key, value)`` pair equal to ``key``, or None."""
        node = self._find(key)
        return (node.key, node.value) if node is not None else None

    def erase(self, key: Any) -> bool:
        """Remove ``key`` if present. Returns whether something was removed."""

        def _remove(node: _Node | None) -> tuple[_Node | None, bool]:
            if node is None:
                return None, False
            if self._lt(key, node.key):
                node.left, removed = _remove(node.left)
            elif self._lt(node.key, key):
                node.right, removed = _remove(node.right)
            else:
                if node.left is None:
                    return node.right, True
                if node.right is None:
                    return node.left, True
                rest, successor = _pop_min(node.right)
                successor.left = node.left
                successor.right = rest
                return _rebalance(successor), True
            return _rebalance(node), removed

        self._root, removed = _remove(self._root)
        if removed:
            self._size -= 1
        return removed

    def upper_bound(self, key: Any) -> tuple[Any, Any] | None:
        """Return the pair with the smallest key not lower than ``key``."""
        node = self._root
        candidate: _Node | None = None
        while node is not None:
            if not self._lt(node.key, key):
                if not self._lt(key, node.key):
                    return node.key, node.value
                candidate = node
                node = node.left
            else:
                node = node.right
        return (candidate.key, candidate.value) if candidate is not None else None

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield ``(key, value)`` pairs in ascending key order."""
        stack: list[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key, node.value
            node = node.right

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def height(self) -> int:
        """Height of the tree; 0 when empty."""
        return _height(self._root)