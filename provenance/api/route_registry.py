"""
API Route Registry
Central registration of all API routes
"""
import logging
from flask import Flask

logger = logging.getLogger(__name__)


def register_routes(app: Flask):
    """Register all API routes with the Flask app"""
    from provenance.api.v1.product_routes import product_bp
    from provenance.api.v1.access_routes import access_bp

    app.register_blueprint(product_bp, url_prefix='/v1/products')
    app.register_blueprint(access_bp, url_prefix='/v1/access')

    logger.info("Registered: /v1/products, /v1/access")
