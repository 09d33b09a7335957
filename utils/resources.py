"""
Resources Module - Generic key-value backed REST resources
A resource is a named collection exposing create, read, update and delete
"""

import logging
from flask import current_app
from werkzeug.exceptions import NotFound
from .keyvalue import create_store

MERGE_STORED_WINS = 'stored'
MERGE_INCOMING_WINS = 'incoming'

# plugin id -> label
RESOURCE_DEFINITIONS = {
    'portfolio_portfolio': 'portfolio',
    'portfolio_menu_api': 'menu api',
}


def merge_records(stored, incoming, policy=MERGE_STORED_WINS):
    """
    Shallow-merge an incoming partial record with a stored one.

    With the 'stored' policy keys already present in the stored record keep
    their stored value and the incoming data can only add new keys. With the
    'incoming' policy incoming values replace stored ones.
    """
    if policy == MERGE_STORED_WINS:
        merged = dict(incoming)
        merged.update(stored)
    elif policy == MERGE_INCOMING_WINS:
        merged = dict(stored)
        merged.update(incoming)
    else:
        raise ValueError(f"Unknown merge policy: {policy}")
    return merged


class CrudResource:
    """CRUD operations over one key-value collection"""

    def __init__(self, plugin_id, label, store, logger=None, merge_policy=MERGE_STORED_WINS):
        self.plugin_id = plugin_id
        self.label = label
        self.store = store
        self.logger = logger or logging.getLogger('rest')
        self.merge_policy = merge_policy

    def create(self, data):
        """Save a new record and return it with status 201"""
        record = self.store.add(data)
        self.logger.info(f"Created new {self.label} record {record['id']}.")
        return record, 201

    def read(self, record_id):
        record = self.store.get(record_id)
        if record is None:
            raise NotFound()
        return record

    def list(self):
        records = self.store.get_all()
        return [records[record_id] for record_id in sorted(records)]

    def update(self, record_id, data):
        """Merge partial data into a stored record and return it with status 200"""
        if not self.store.has(record_id):
            raise NotFound()
        stored = self.store.get(record_id)
        merged = merge_records(stored, data, self.merge_policy)
        merged['id'] = record_id
        self.store.set(record_id, merged)
        self.logger.info(f"The {self.label} record {record_id} has been updated.")
        return merged, 200

    def destroy(self, record_id):
        """Delete a record; deleted responses have an empty body"""
        if not self.store.has(record_id):
            raise NotFound()
        self.store.delete(record_id)
        self.logger.info(f"The {self.label} record {record_id} has been deleted.")
        return None, 204


def register_resources(app):
    """Instantiate one CrudResource per definition and attach them to the app"""
    backend = app.config.get('KEYVALUE_BACKEND', 'database')
    max_retries = app.config.get('KEYVALUE_MAX_RETRIES', 5)
    merge_policy = app.config.get('PATCH_MERGE_POLICY', MERGE_STORED_WINS)

    resources = {}
    for plugin_id, label in RESOURCE_DEFINITIONS.items():
        store = create_store(plugin_id, backend=backend, max_retries=max_retries)
        resources[plugin_id] = CrudResource(
            plugin_id, label, store, logger=app.logger, merge_policy=merge_policy)
    app.extensions['rest_resources'] = resources
    app.logger.info(f"Registered REST resources: {', '.join(resources)} ({backend} storage)")
    return resources


def get_resource(plugin_id):
    """Get a registered resource from the current app"""
    return current_app.extensions['rest_resources'][plugin_id]


__all__ = [
    'CrudResource',
    'merge_records',
    'register_resources',
    'get_resource',
    'MERGE_STORED_WINS',
    'MERGE_INCOMING_WINS',
    'RESOURCE_DEFINITIONS'
]
