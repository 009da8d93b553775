from .product_validator import ProductValidator, product_validator
from .webhook_validator import WebhookValidator, webhook_validator

__all__ = ['ProductValidator', 'product_validator', 'WebhookValidator', 'webhook_validator']
