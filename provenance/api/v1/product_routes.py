"""
Product Routes
Creation, transfer, verification and read access for registry products
"""
from flask import Blueprint, request, current_app
import logging

from provenance.api.middleware.auth_middleware import auth_middleware
from provenance.api.middleware.response_middleware import response_middleware
from provenance.validators.product_validator import ProductValidator
from provenance.utils.formatters import format_product

product_bp = Blueprint('products', __name__)
logger = logging.getLogger(__name__)


def _registry():
    return current_app.extensions['provenance']['registry']


def _validation_error(message):
    return response_middleware.create_error_response('Validation failed', 400, details={'message': message},
                                                     error_type='ValidationError')


@product_bp.route('', methods=['GET'])
def list_products():
    """List products in id order"""
    offset = request.args.get('offset', 0, type=int)
    limit = request.args.get('limit', 50, type=int)

    products = _registry().list_products(offset=offset, limit=limit)
    return response_middleware.create_success_response({
        'products': [format_product(p, include_checkpoints=False) for p in products],
        'offset': offset,
        'total': _registry().get_total_products()
    })


@product_bp.route('/count', methods=['GET'])
def count_products():
    return response_middleware.create_success_response({'total': _registry().get_total_products()})


@product_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id):
    """Get a product with its full checkpoint log"""
    product = _registry().get_product(product_id)
    return response_middleware.create_success_response(format_product(product))


@product_bp.route('/<int:product_id>/checkpoints', methods=['GET'])
def get_checkpoints(product_id):
    return response_middleware.create_success_response({
        'id': product_id,
        'checkpoints': _registry().get_checkpoint_log(product_id)
    })


@product_bp.route('', methods=['POST'])
@auth_middleware.identity_required
def create_product(caller):
    """Register a new product owned by the caller"""
    data = request.get_json(silent=True)

    error = ProductValidator.validate_product_data(data)
    if error:
        return _validation_error(error)

    product_id = _registry().create_product(
        name=data['name'],
        manufacturer_name=data['manufacturer_name'],
        initial_location=data.get('location', ''),
        caller=caller
    )

    return response_middleware.create_success_response({'id': product_id}, 'Product created', 201)


@product_bp.route('/<int:product_id>/transfer', methods=['POST'])
@auth_middleware.identity_required
def transfer_product(caller, product_id):
    """Transfer a product to a new owner and location"""
    data = request.get_json(silent=True)

    error = ProductValidator.validate_transfer_data(data)
    if error:
        return _validation_error(error)

    product = _registry().transfer_product(
        product_id,
        new_owner=data['new_owner'],
        new_location=data['new_location'],
        caller=caller
    )

    return response_middleware.create_success_response(format_product(product), 'Product transferred')


@product_bp.route('/<int:product_id>/verify', methods=['POST'])
@auth_middleware.identity_required
def verify_product(caller, product_id):
    product = _registry().verify_product(product_id, caller=caller)
    return response_middleware.create_success_response(format_product(product), 'Product verified')
