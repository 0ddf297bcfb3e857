import pytest

from canopy.tree import Node


@pytest.fixture
def tree():
    root = Node("root")
    menu = root.add_child(Node("menu"))
    button = menu.add_child(Node("button"))
    return root, menu, button


def test_paths_and_ancestors(tree):
    root, menu, button = tree

    assert button.path == "/root/menu/button"
    assert list(button.ancestors()) == [menu, root]
    assert button.root is root
    assert root.parent is None
    assert repr(button) == "Node('/root/menu/button')"


def test_children_passed_to_constructor():
    a, b = Node("a"), Node("b")
    parent = Node("parent", [a, b])

    assert parent.children == (a, b)
    assert a.parent is parent


def test_add_child_reparents(tree):
    root, menu, button = tree

    root.add_child(button)

    assert button.parent is root
    assert menu.children == ()
    assert root.children == (menu, button)


def test_remove_child(tree):
    _, menu, button = tree

    assert menu.remove_child(button) is button
    assert button.parent is None
    with pytest.raises(ValueError, match="is not a child"):
        menu.remove_child(button)


def test_cannot_create_cycles(tree):
    root, menu, button = tree

    with pytest.raises(ValueError, match="beneath itself"):
        button.add_child(root)
    with pytest.raises(ValueError):
        menu.add_child(menu)


def test_default_name_is_class_name():
    class Menu(Node):
        pass

    assert Menu().name == "Menu"
