"""
API Blueprint - Decoupled portfolio REST endpoints
Handles: portfolio and menu records (CRUD), news aggregation, menu trees
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import routes
