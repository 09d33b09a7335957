"""
API Routes - Decoupled portfolio REST endpoints
Handles: record create/update/delete, news aggregation, menu trees
"""

from flask import request, jsonify, current_app
from werkzeug.exceptions import BadRequest
from utils.decorators import api_auth_required
from utils.resources import get_resource
from utils.menu import build_menu_tree
from . import api_bp

# URL segment -> resource plugin id
RESOURCE_ROUTES = {
    'decoupled-portfolio': 'portfolio_portfolio',
    'portfolio-menu-api': 'portfolio_menu_api',
}


def get_json_object():
    """Request body as a dict; records must be JSON objects"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object.')
    return data


@api_auth_required
def create_record(plugin_id):
    """Responds to POST requests and saves the new record"""
    record, status = get_resource(plugin_id).create(get_json_object())
    return jsonify(record), status


@api_auth_required
def update_record(plugin_id, record_id):
    """Responds to PATCH requests"""
    record, status = get_resource(plugin_id).update(record_id, get_json_object())
    return jsonify(record), status


@api_auth_required
def delete_record(plugin_id, record_id):
    """Responds to DELETE requests; deleted responses have an empty body"""
    _, status = get_resource(plugin_id).destroy(record_id)
    return '', status


for segment, plugin_id in RESOURCE_ROUTES.items():
    api_bp.add_url_rule(
        f'/{segment}',
        endpoint=f'{plugin_id}_create',
        view_func=create_record,
        methods=['POST'],
        defaults={'plugin_id': plugin_id})
    # The int converter only matches \d+, so other ids never reach the resource
    api_bp.add_url_rule(
        f'/{segment}/<int:record_id>',
        endpoint=f'{plugin_id}_update',
        view_func=update_record,
        methods=['PATCH'],
        defaults={'plugin_id': plugin_id})
    api_bp.add_url_rule(
        f'/{segment}/<int:record_id>',
        endpoint=f'{plugin_id}_delete',
        view_func=delete_record,
        methods=['DELETE'],
        defaults={'plugin_id': plugin_id})


@api_bp.route('/decoupled-portfolio', methods=['GET'], defaults={'path': ''}, strict_slashes=False)
@api_bp.route('/decoupled-portfolio/<path>', methods=['GET'])
def portfolio_news(path):
    """News aggregate for the node behind a path alias"""
    payload, status = current_app.extensions['content_reader'].read(path)
    return jsonify(payload), status


@api_bp.route('/portfolio-menu-api/<menu_name>', methods=['GET'])
def menu_tree(menu_name):
    """Nested menu tree"""
    tree = current_app.extensions['menu_tree'].load(menu_name)
    return jsonify(build_menu_tree(tree))
