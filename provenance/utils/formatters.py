"""
Formatters
Presentation helpers: checkpoint text and JSON-ready product views
"""

from typing import Dict, Any, List

from provenance.models.enums import CheckpointKind
from provenance.models.product import Product, Checkpoint
from provenance.utils.date_helpers import to_utc_datetime


def render_checkpoint(checkpoint: Checkpoint) -> str:
    """
    Render a checkpoint as a single log line

    The text encodes the event kind, the relevant location (or verifier for
    verification) and the call timestamp as decimal digits.
    """
    if checkpoint.kind == CheckpointKind.CREATED:
        return f"Product created at {checkpoint.location} on {checkpoint.timestamp}"
    if checkpoint.kind == CheckpointKind.TRANSFERRED:
        return f"Product transferred to {checkpoint.location} on {checkpoint.timestamp}"
    if checkpoint.kind == CheckpointKind.VERIFIED:
        return f"Product verified by {checkpoint.actor} on {checkpoint.timestamp}"
    raise ValueError(f"Unknown checkpoint kind: {checkpoint.kind}")


def render_checkpoints(product: Product) -> List[str]:
    return [render_checkpoint(checkpoint) for checkpoint in product.checkpoints]


def format_checkpoint(checkpoint: Checkpoint) -> Dict[str, Any]:
    return {
        'kind': checkpoint.kind.value,
        'location': checkpoint.location,
        'actor': checkpoint.actor,
        'timestamp': checkpoint.timestamp,
        'recorded_at': to_utc_datetime(checkpoint.timestamp).isoformat(),
        'text': render_checkpoint(checkpoint)
    }


def format_product(product: Product, include_checkpoints: bool = True) -> Dict[str, Any]:
    """Format a product record for API responses"""
    data = {
        'id': product.id,
        'name': product.name,
        'manufacturer_name': product.manufacturer_name,
        'manufacturing_timestamp': product.manufacturing_timestamp,
        'manufactured_at': to_utc_datetime(product.manufacturing_timestamp).isoformat(),
        'current_location': product.current_location,
        'current_owner': product.current_owner,
        'is_verified': product.is_verified,
        'checkpoint_count': product.revision
    }

    if include_checkpoints:
        data['checkpoints'] = [format_checkpoint(c) for c in product.checkpoints]

    return data
