"""
Decorators Module - Authentication decorators for API endpoints
"""

from functools import wraps
from flask import current_app, jsonify
from flask_login import current_user


def api_auth_required(f):
    """Decorator to require an authenticated API user when API_AUTH_REQUIRED is set"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_app.config.get('API_AUTH_REQUIRED') and not current_user.is_authenticated:
            response = jsonify({'status': 401, 'message': 'Authentication required.'})
            response.headers['WWW-Authenticate'] = 'Basic realm="api"'
            return response, 401
        return f(*args, **kwargs)
    return decorated_function
