"""
Request event processing
Applies incoming request events to the IP store
"""
from datetime import datetime
from typing import List, Optional
import logging

from ipstore.models.events import RequestEvent
from ipstore.core.store import PulleyIPStore

logger = logging.getLogger(__name__)


class RequestProcessor:
    """
    Process request events and keep the IP store up to date
    """

    def __init__(self, store: PulleyIPStore):
        """
        Initialize request processor

        Args:
            store: IP store instance
        """
        self.store = store

    def process_event(self, event: RequestEvent) -> None:
        """
        Process a single event

        Args:
            event: Event to process
        """
        try:
            self.store.request_handled(event.ip)
            logger.debug(f"Processed request from {event.ip} at {event.timestamp.isoformat()}")

        except Exception as e:
            logger.error(f"Error processing event: {e}", exc_info=True)
            raise

    def process_batch(self, events: List[RequestEvent]) -> int:
        """
        Process multiple events

        Args:
            events: List of events

        Returns:
            Number of successfully processed events
        """
        success_count = 0
        for event in events:
            try:
                self.process_event(event)
                success_count += 1
            except Exception as e:
                logger.error(f"Failed to process event: {e}")

        return success_count

    def get_summary(self, limit: Optional[int] = None) -> dict:
        """
        Get a summary of the store

        Args:
            limit: Maximum number of ranked addresses to include (default: all)

        Returns:
            Dictionary with timestamp, stats and the ranked addresses
        """
        ranked, stats = self.store.snapshot()
        if limit is not None:
            ranked = ranked[:limit]

        return {
            "timestamp": datetime.utcnow().isoformat(),
            "stats": stats,
            "top": [{"ip": str(ip), "count": count} for ip, count in ranked],
        }
