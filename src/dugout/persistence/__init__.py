from .codec import decode_state, encode_state, estimate_size, is_url_too_long, parse_share_fragment, with_tab
from .duckdb_store import AnalyticsStore
from .schema import state_to_payload, validate_state_payload

__all__ = [
    "AnalyticsStore",
    "decode_state",
    "encode_state",
    "estimate_size",
    "is_url_too_long",
    "parse_share_fragment",
    "state_to_payload",
    "validate_state_payload",
    "with_tab",
]
