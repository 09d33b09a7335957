"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import api_auth_required
from .keyvalue import MemoryKeyValueStore, DatabaseKeyValueStore, create_store
from .resources import (
    CrudResource,
    merge_records,
    register_resources,
    get_resource
)
from .content import (
    ContentReader,
    PathAliasResolver,
    NodeLoader,
    FileUrlGenerator,
    register_content_reader
)
from .menu import MenuTreeElement, MenuTreeProvider, build_menu_tree, register_menu_provider
from .security import (
    ApiUser,
    init_api_credentials,
    get_api_credentials,
    verify_password,
    authenticate,
    load_user_from_request
)

__all__ = [
    # Decorators
    'api_auth_required',

    # Key-value storage
    'MemoryKeyValueStore',
    'DatabaseKeyValueStore',
    'create_store',

    # Resources
    'CrudResource',
    'merge_records',
    'register_resources',
    'get_resource',

    # Content
    'ContentReader',
    'PathAliasResolver',
    'NodeLoader',
    'FileUrlGenerator',
    'register_content_reader',

    # Menu
    'MenuTreeElement',
    'MenuTreeProvider',
    'build_menu_tree',
    'register_menu_provider',

    # Security
    'ApiUser',
    'init_api_credentials',
    'get_api_credentials',
    'verify_password',
    'authenticate',
    'load_user_from_request'
]
