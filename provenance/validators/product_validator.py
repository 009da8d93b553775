#validators/product_validator.py
"""
Product Validation
Request-level validation for product operations; business rules live in the services
"""

from typing import Optional, Dict, Any
import re

ADDRESS_PATTERN = re.compile(r'^0x[a-fA-F0-9]{40}$')
MAX_TEXT_LENGTH = 200


class ProductValidator:
    """Validator for product-related request payloads"""

    @staticmethod
    def _check_text(data: Dict[str, Any], field: str, required: bool) -> Optional[str]:
        value = data.get(field)
        if value is None:
            return f"{field} is required" if required else None

        if not isinstance(value, str):
            return f"{field} must be a string"

        if required and not value.strip():
            return f"{field} is required"

        if len(value) > MAX_TEXT_LENGTH:
            return f"{field} cannot exceed {MAX_TEXT_LENGTH} characters"

        return None

    @staticmethod
    def validate_product_data(product_data: Dict[str, Any]) -> Optional[str]:
        """
        Validate product data for creation

        Args:
            product_data: Request body

        Returns:
            Error message if validation fails, None if valid
        """
        if not isinstance(product_data, dict) or not product_data:
            return "Product data is required"

        for field in ['name', 'manufacturer_name']:
            error = ProductValidator._check_text(product_data, field, required=True)
            if error:
                return error

        return ProductValidator._check_text(product_data, 'location', required=False)

    @staticmethod
    def validate_transfer_data(transfer_data: Dict[str, Any]) -> Optional[str]:
        """
        Validate ownership transfer data

        Args:
            transfer_data: Request body

        Returns:
            Error message if validation fails, None if valid
        """
        if not isinstance(transfer_data, dict) or not transfer_data:
            return "Transfer data is required"

        new_owner = transfer_data.get('new_owner')
        if not new_owner:
            return "new_owner is required"

        if not isinstance(new_owner, str) or not ADDRESS_PATTERN.match(new_owner.strip()):
            return "new_owner must be a valid wallet address"

        return ProductValidator._check_text(transfer_data, 'new_location', required=True)


product_validator = ProductValidator()
