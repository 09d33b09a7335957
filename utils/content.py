"""
Content Module - Read-only aggregation of content nodes
Resolves a public path alias to a node and joins its referenced news nodes
and their banner files into a response payload
"""

import logging
import re
from flask import request
from extensions import db
from models import Node, PathAlias
from .keyvalue import MAX_RECORD_ID

NODE_PATH_PATTERN = re.compile(r'^/node/(\d+)$')
PUBLIC_SCHEME = 'public://'
BANNER_SLOTS = ('banner_1', 'banner_2', 'banner_3')

NOT_FOUND_PAYLOAD = {
    'status': 404,
    'message': 'Not Found.',
    'supportMessage': 'Content not found',
}
ERROR_PAYLOAD = {
    'status': 500,
    'message': 'An error occurred.',
}


class ContentNotFound(LookupError):
    """Raised when an alias or node cannot be resolved"""


class PathAliasResolver:
    """Resolves public aliases through the path_aliases table"""

    def resolve(self, path):
        """Return the node id aliased by '/<path>', or None"""
        alias = PathAlias.query.filter_by(alias='/' + path).first()
        if not alias or not alias.path:
            return None
        match = NODE_PATH_PATTERN.match(alias.path)
        return int(match.group(1)) if match else None


class NodeLoader:
    def load(self, node_id):
        if not 0 <= node_id <= MAX_RECORD_ID:
            return None
        return db.session.get(Node, node_id)


class FileUrlGenerator:
    """Turns stored file URIs into absolute URLs"""

    def __init__(self, base_url=None, public_path='static/assets/uploads'):
        self.base_url = base_url
        self.public_path = public_path.strip('/')

    def get_base_url(self):
        return (self.base_url or request.url_root).rstrip('/')

    def absolute_url(self, uri):
        if uri.startswith(('http://', 'https://')):
            return uri
        base = self.get_base_url()
        if uri.startswith(PUBLIC_SCHEME):
            return f"{base}/{self.public_path}/{uri[len(PUBLIC_SCHEME):]}"
        return f"{base}/{uri.lstrip('/')}"


def format_body(body):
    """First body chunk's value, or an empty string"""
    if not body:
        return ''
    chunk = body[0]
    if isinstance(chunk, dict):
        return chunk.get('value') or ''
    return chunk or ''


class ContentReader:
    """Builds the news aggregate for a node reached through its alias"""

    def __init__(self, alias_resolver, nodes, file_urls, logger=None):
        self.alias_resolver = alias_resolver
        self.nodes = nodes
        self.file_urls = file_urls
        self.logger = logger or logging.getLogger('portfolio')

    def read(self, path):
        """
        Aggregate the news referenced by the node behind an alias.

        Args:
            path (str): Public alias segment, without the leading slash

        Returns:
            tuple: (payload dict, HTTP status); status mirrors payload['status']
        """
        try:
            node = self.load_node(path)
            news = []
            for news_id in node.news_ids:
                news_node = self.nodes.load(news_id)
                if news_node:
                    news.append(self.format_news(news_node))
            return {'status': 200, 'data': {'news': news}}, 200
        except ContentNotFound as e:
            self.logger.info(f"Content not found: {str(e)}")
            return dict(NOT_FOUND_PAYLOAD), 404
        except Exception as e:
            self.logger.error(f"Error reading content for {path!r}: {str(e)}")
            return dict(ERROR_PAYLOAD), 500

    def load_node(self, path):
        if not path:
            raise ContentNotFound('Name query missing!')
        node_id = self.alias_resolver.resolve(path)
        if node_id is None:
            raise ContentNotFound(f"No alias for /{path}")
        node = self.nodes.load(node_id)
        if not node:
            raise ContentNotFound(f"Node {node_id} does not exist")
        return node

    def format_news(self, node):
        return {
            'title': node.title,
            'body': format_body(node.body),
            'banners': self.format_banners(node),
        }

    def format_banners(self, node):
        banners = {}
        for slot in BANNER_SLOTS:
            banner = node.get_banner(slot)
            # Only slots that resolve to a concrete file
            if banner is not None and getattr(banner, 'uri', None):
                banners[slot] = {'url': self.file_urls.absolute_url(banner.uri)}
        return banners


def register_content_reader(app):
    """Wire the content reader with database collaborators"""
    reader = ContentReader(
        PathAliasResolver(),
        NodeLoader(),
        FileUrlGenerator(
            base_url=app.config.get('SITE_BASE_URL'),
            public_path=app.config.get('PUBLIC_FILES_PATH', 'static/assets/uploads')),
        logger=app.logger)
    app.extensions['content_reader'] = reader
    return reader


__all__ = [
    'ContentReader',
    'ContentNotFound',
    'PathAliasResolver',
    'NodeLoader',
    'FileUrlGenerator',
    'format_body',
    'register_content_reader',
    'NOT_FOUND_PAYLOAD',
    'ERROR_PAYLOAD'
]
