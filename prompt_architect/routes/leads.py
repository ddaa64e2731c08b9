"""
Lead capture route.
"""
import logging

from flask import Blueprint, request, jsonify

from prompt_architect.extensions import get_services
from prompt_architect.services.leads import DATABASE_ERROR
from prompt_architect.validation.schemas import LeadRequest, parse_body

logger = logging.getLogger('routes.leads')

bp = Blueprint('leads', __name__, url_prefix='/api')


@bp.route('/leads', methods=['POST'])
def create_lead():
    """Create (or re-touch) a lead from an email capture form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict) and (not data.get('email') or not data.get('source')):
        return jsonify({'success': False, 'error': 'Missing required fields'}), 400

    parsed = parse_body(LeadRequest, data)
    if not parsed.ok:
        return jsonify({'success': False, 'error': parsed.error}), 400
    body = parsed.value

    intake_data = body.intake_data.to_dict() if body.intake_data else None
    result = get_services().leads.create(
        body.email, body.source, company=body.company, intake_data=intake_data,
    )

    if not result.success:
        if result.error == DATABASE_ERROR:
            return jsonify({'success': False, 'error': 'Internal server error'}), 500
        return jsonify({'success': False, 'error': result.error}), 400

    logger.info("Lead %s captured via API (source=%s)", result.lead_id, body.source)
    return jsonify({'success': True, 'leadId': result.lead_id})
