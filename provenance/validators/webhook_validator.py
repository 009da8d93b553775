"""
Webhook Validation
Verifies signatures on registry webhook deliveries (receiver side)
"""
import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


class WebhookValidator:
    """Validates webhook signatures"""

    @staticmethod
    def verify_signature(payload: bytes, signature: str, secret: str) -> bool:
        """
        Verify webhook signature using HMAC SHA256

        Args:
            payload: Raw webhook payload bytes
            signature: Value of the X-Registry-Signature header
            secret: Shared webhook secret

        Returns:
            True if signature is valid, False otherwise
        """
        if not signature or not secret:
            logger.warning("Missing signature or secret for webhook verification")
            return False

        if signature.startswith('sha256='):
            signature = signature[7:]

        expected = hmac.new(
            secret.encode('utf-8'),
            payload,
            hashlib.sha256
        ).hexdigest()

        # Constant-time comparison
        is_valid = hmac.compare_digest(expected, signature)

        if not is_valid:
            logger.warning("Webhook signature verification failed")

        return is_valid


webhook_validator = WebhookValidator()
