"""
HTTP API blueprints
"""
from flask import current_app

from ipstore.core.processor import RequestProcessor
from ipstore.core.store import PulleyIPStore


def get_store() -> PulleyIPStore:
    """Get the IP store owned by the current application"""
    return current_app.extensions["ipstore"]


def get_processor() -> RequestProcessor:
    """Get a processor bound to the current application's store"""
    return RequestProcessor(get_store())
