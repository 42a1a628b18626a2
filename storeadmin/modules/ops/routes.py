"""
Ops Routes
==========

Public health endpoint.
"""

from datetime import datetime, timezone

from flask import jsonify
from flask_cors import cross_origin

from . import ops_health_bp

SERVICE_NAME = 'store-admin'


def _utc_timestamp():
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def _build_health_response():
    return {
        'status': 'healthy',
        'service': SERVICE_NAME,
        'timestamp': _utc_timestamp(),
    }


@ops_health_bp.route('/')
@ops_health_bp.route('')
@cross_origin(methods=['GET'])
def health_check():
    """Public health endpoint for uptime monitors."""
    return jsonify(_build_health_response()), 200
