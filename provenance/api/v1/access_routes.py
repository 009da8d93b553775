"""
Access Control Routes
Role queries and administrator-only role management
"""
from flask import Blueprint, current_app
import logging

from provenance.api.middleware.auth_middleware import auth_middleware
from provenance.api.middleware.response_middleware import response_middleware

access_bp = Blueprint('access', __name__)
logger = logging.getLogger(__name__)


def _access_control():
    return current_app.extensions['provenance']['access_control']


@access_bp.route('/administrator', methods=['GET'])
def get_administrator():
    return response_middleware.create_success_response({
        'administrator': _access_control().get_administrator()
    })


@access_bp.route('/<identity>', methods=['GET'])
def get_roles(identity):
    """Role flags for one account address"""
    return response_middleware.create_success_response({
        'identity': identity,
        'roles': _access_control().roles_of(identity)
    })


@access_bp.route('/manufacturers/<identity>', methods=['POST'])
@auth_middleware.identity_required
def grant_manufacturer(caller, identity):
    address = _access_control().grant_manufacturer(identity, caller=caller)
    return response_middleware.create_success_response({'identity': address}, 'Manufacturer role granted')


@access_bp.route('/manufacturers/<identity>', methods=['DELETE'])
@auth_middleware.identity_required
def revoke_manufacturer(caller, identity):
    address = _access_control().revoke_manufacturer(identity, caller=caller)
    return response_middleware.create_success_response({'identity': address or identity},
                                                       'Manufacturer role revoked')


@access_bp.route('/verifiers/<identity>', methods=['POST'])
@auth_middleware.identity_required
def grant_verifier(caller, identity):
    address = _access_control().grant_verifier(identity, caller=caller)
    return response_middleware.create_success_response({'identity': address}, 'Verifier role granted')


@access_bp.route('/verifiers/<identity>', methods=['DELETE'])
@auth_middleware.identity_required
def revoke_verifier(caller, identity):
    address = _access_control().revoke_verifier(identity, caller=caller)
    return response_middleware.create_success_response({'identity': address or identity},
                                                       'Verifier role revoked')
