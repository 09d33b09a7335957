"""
Content Import Script: JSON to database
Loads files, nodes, path aliases and menus from a JSON document

Usage:
    python migrations/import_content.py content.json
    flask --app app import-content content.json

Document shape:
    {
        "files": [{"id": 1, "uri": "public://banner.jpg", "filename": "banner.jpg"}],
        "nodes": [{"id": 1, "title": "Home", "body": "<p>..</p>",
                   "banner_1": 1, "news": [2, 3]}],
        "aliases": [{"alias": "/home", "path": "/node/1"}],
        "menus": {"main": [{"title": "Home", "url": "/", "children": [...]}]}
    }
"""

import os
import sys
import json

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from extensions import db
from models import File, Node, NodeNewsReference, PathAlias, MenuLink


def normalize_body(body):
    """Body chunks as a list of {value, format} dicts"""
    if not body:
        return []
    if isinstance(body, str):
        return [{'value': body, 'format': 'basic_html'}]
    if isinstance(body, dict):
        return [body]
    return [
        chunk if isinstance(chunk, dict) else {'value': str(chunk), 'format': 'basic_html'}
        for chunk in body
    ]


def import_files(files_data):
    """Upsert file entities by id"""
    for file_json in files_data:
        file = db.session.get(File, file_json['id'])
        if not file:
            file = File(id=file_json['id'])
            db.session.add(file)
        file.uri = file_json['uri']
        file.filename = file_json.get('filename') or os.path.basename(file_json['uri'])
    db.session.commit()
    return len(files_data)


def import_nodes(nodes_data):
    """Upsert nodes by id and replace their news references"""
    for node_json in nodes_data:
        node = db.session.get(Node, node_json['id'])
        if not node:
            node = Node(id=node_json['id'])
            db.session.add(node)
        node.type = node_json.get('type', 'page')
        node.title = node_json['title']
        node.body = normalize_body(node_json.get('body'))
        node.banner_1_id = node_json.get('banner_1')
        node.banner_2_id = node_json.get('banner_2')
        node.banner_3_id = node_json.get('banner_3')

        # Flush the removals before re-inserting the same (node_id, delta) keys
        node.news_references.clear()
        db.session.flush()
        for delta, target_id in enumerate(node_json.get('news', [])):
            node.news_references.append(NodeNewsReference(delta=delta, target_id=target_id))
    db.session.commit()
    return len(nodes_data)


def import_aliases(aliases_data):
    """Upsert path aliases by alias"""
    for alias_json in aliases_data:
        alias = '/' + alias_json['alias'].lstrip('/')
        path_alias = PathAlias.query.filter_by(alias=alias).first()
        if not path_alias:
            path_alias = PathAlias(alias=alias)
            db.session.add(path_alias)
        path_alias.path = alias_json['path']
        path_alias.langcode = alias_json.get('langcode', 'en')
    db.session.commit()
    return len(aliases_data)


def import_menu(menu_name, items):
    """Replace a menu with a nested list of {title, url, weight?, children?}"""
    MenuLink.query.filter_by(menu_name=menu_name).delete()

    count = 0
    stack = [(None, items)]
    while stack:
        parent_id, children = stack.pop()
        for position, item in enumerate(children):
            link = MenuLink(
                menu_name=menu_name,
                title=item['title'],
                url=item.get('url', ''),
                parent_id=parent_id,
                weight=item.get('weight', position))
            db.session.add(link)
            db.session.flush()
            count += 1
            if item.get('children'):
                stack.append((link.id, item['children']))
    db.session.commit()
    return count


def import_content(data):
    """Import a whole content document; returns counts per section"""
    counts = {
        'files': import_files(data.get('files', [])),
        'nodes': import_nodes(data.get('nodes', [])),
        'aliases': import_aliases(data.get('aliases', [])),
        'menu_links': 0,
    }
    for menu_name, items in data.get('menus', {}).items():
        counts['menu_links'] += import_menu(menu_name, items)
    return counts


def import_content_file(json_file):
    with open(json_file, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return import_content(data)


def main():
    """Main import function"""
    from app import create_app

    if len(sys.argv) < 2:
        print("Usage: python migrations/import_content.py <content.json>")
        sys.exit(1)

    json_file = sys.argv[1]
    if not os.path.exists(json_file):
        print(f"Error: {json_file} not found!")
        sys.exit(1)

    app = create_app()
    with app.app_context():
        print(f"Loading content from {json_file}...")
        counts = import_content_file(json_file)
        for name, count in counts.items():
            print(f"  [OK] {name}: {count}")
        print("Import completed successfully!")


if __name__ == '__main__':
    main()
