"""
Menu Module - Site menu trees
Loads menu links into an ordered forest and shapes it into nested dicts
"""

from models import MenuLink

# Deepest menu level returned, as in Drupal menu trees
DEFAULT_MAX_DEPTH = 9


class MenuTreeElement:
    """A menu link with its ordered children"""

    def __init__(self, title, url, subtree=None):
        self.title = title
        self.url = url
        self.subtree = subtree if subtree is not None else []

    def __repr__(self):
        return f"<MenuTreeElement {self.title!r} ({len(self.subtree)} children)>"


class MenuTreeProvider:
    """Builds menu forests from the menu_links table"""

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def load(self, menu_name):
        """
        Load a menu as an ordered forest.

        Siblings are ordered by weight, then title. Links whose parent is not
        part of the same menu are treated as roots. Links nested deeper than
        max_depth levels are left out, which keeps responses within what the
        JSON encoder can serialize.
        """
        links = MenuLink.query.filter_by(menu_name=menu_name).order_by(
            MenuLink.weight, MenuLink.title, MenuLink.id).all()

        known_ids = {link.id for link in links}
        children = {}
        tree = []
        for link in links:
            element = MenuTreeElement(link.title, link.url)
            if link.parent_id in known_ids:
                children.setdefault(link.parent_id, []).append((link.id, element))
            else:
                tree.append((link.id, element))

        stack = [(link_id, element, 1) for link_id, element in tree]
        while stack:
            link_id, element, depth = stack.pop()
            if depth >= self.max_depth:
                continue
            for child_id, child in children.get(link_id, []):
                element.subtree.append(child)
                stack.append((child_id, child, depth + 1))
        return [element for _, element in tree]


def build_menu_tree(tree):
    """
    Map a menu forest to [{title, url, sub_menu?}, ...].

    'sub_menu' is only present for elements with children. Uses an explicit
    stack so arbitrarily deep menus do not hit the recursion limit.
    """
    items = []
    stack = [(tree, items)]
    while stack:
        elements, output = stack.pop()
        for element in elements:
            item = {
                'title': element.title,
                'url': element.url,
            }
            if element.subtree:
                item['sub_menu'] = []
                stack.append((element.subtree, item['sub_menu']))
            output.append(item)
    return items


def register_menu_provider(app):
    provider = MenuTreeProvider(max_depth=app.config.get('MENU_MAX_DEPTH', DEFAULT_MAX_DEPTH))
    app.extensions['menu_tree'] = provider
    return provider


__all__ = ['DEFAULT_MAX_DEPTH', 'MenuTreeElement', 'MenuTreeProvider', 'build_menu_tree', 'register_menu_provider']
