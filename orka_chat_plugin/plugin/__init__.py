"""
Plugin layer: RPC envelope, argument normalization, model routing and the
``Chat``/``Complete`` dispatcher.
"""

from .dispatcher import LlmPlugin, filter_chat_output, filter_complete_output, normalize_method
from .envelope import CallRequest, CallResponse
from .errors import RequestError
from .routing import ModelRouter, Route, marker_matcher

__all__ = [
    "LlmPlugin",
    "CallRequest",
    "CallResponse",
    "RequestError",
    "ModelRouter",
    "Route",
    "marker_matcher",
    "normalize_method",
    "filter_chat_output",
    "filter_complete_output",
]
