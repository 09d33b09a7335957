"""
Security Module - API credentials and request authentication
"""

from flask import current_app
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash


class ApiUser(UserMixin):
    """The single API account configured through the environment"""

    def __init__(self, username):
        self.id = username
        self.username = username


def init_api_credentials(app):
    """Hash the configured API password once, at startup"""
    username = app.config.get('API_USERNAME')
    password = app.config.get('API_PASSWORD')
    if not username or not password:
        credentials = {'username': None, 'password_hash': None}
    else:
        credentials = {
            'username': username,
            'password_hash': generate_password_hash(password)
        }
    app.extensions['api_credentials'] = credentials
    return credentials


def get_api_credentials():
    """Credentials hashed by init_api_credentials for the current app"""
    return current_app.extensions.get('api_credentials', {'username': None, 'password_hash': None})


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


def authenticate(username, password):
    """Return an ApiUser when the credentials match the configured account"""
    credentials = get_api_credentials()
    if not credentials['username'] or not username or password is None:
        return None
    if username != credentials['username']:
        return None
    if not verify_password(password, credentials['password_hash']):
        current_app.logger.warning(f"Failed API authentication for {username}")
        return None
    return ApiUser(username)


def load_user_from_request(request):
    """Flask-Login request loader: HTTP Basic credentials"""
    auth = request.authorization
    if not auth or auth.type != 'basic':
        return None
    return authenticate(auth.username, auth.password)


__all__ = [
    'ApiUser',
    'init_api_credentials',
    'get_api_credentials',
    'verify_password',
    'authenticate',
    'load_user_from_request'
]
