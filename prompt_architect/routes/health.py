"""
Health check route.
"""
from flask import Blueprint, jsonify

from prompt_architect.extensions import get_services

bp = Blueprint('health', __name__, url_prefix='/api')


@bp.route('/health')
def health_check():
    """Store round trip plus whether an LLM key is configured."""
    services = get_services()
    store_ok = services.store.health_check()
    llm_ok = services.llm.configured
    healthy = store_ok and llm_ok
    body = {
        'status': 'healthy' if healthy else 'degraded',
        'checks': {'store': store_ok, 'llm': llm_ok},
    }
    return jsonify(body), 200 if healthy else 503
