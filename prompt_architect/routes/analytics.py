"""
Analytics routes — aggregate counters and rate-limit usage.
"""
from flask import Blueprint, jsonify

from prompt_architect.extensions import get_services

bp = Blueprint('analytics', __name__, url_prefix='/api/analytics')


@bp.route('', methods=['GET'])
def get_analytics():
    """Current analytics aggregate."""
    aggregate = get_services().analytics.get()
    return jsonify({'success': True, 'data': aggregate.to_dict()})


@bp.route('/rate-limits', methods=['GET'])
def rate_limit_stats():
    return jsonify({'success': True, 'data': get_services().rate_limiter.stats()})
