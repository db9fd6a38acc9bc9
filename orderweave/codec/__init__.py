"""
Codec — normalization at the store boundary.

    from orderweave import codec

    order = codec.decode_order(doc)
    fields = codec.encode_order(order)
"""

from orderweave.codec._decode import (
    decode_color,
    decode_bundle_product,
    decode_line_item,
    decode_address,
    decode_status_history,
    decode_order,
    decode_bundle_entry,
    decode_bundle,
    decode_product,
)
from orderweave.codec._encode import (
    encode_bundle_product,
    encode_line_item,
    encode_address,
    encode_status_change,
    encode_order,
)

__all__ = (
    "decode_color",
    "decode_bundle_product",
    "decode_line_item",
    "decode_address",
    "decode_status_history",
    "decode_order",
    "decode_bundle_entry",
    "decode_bundle",
    "decode_product",
    "encode_bundle_product",
    "encode_line_item",
    "encode_address",
    "encode_status_change",
    "encode_order",
)
