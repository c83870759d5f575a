"""
Request event ingestion API endpoints
"""
from flask import Blueprint, request, jsonify
import uuid
import logging

from ipstore.api import get_processor, get_store
from ipstore.config import settings
from ipstore.models.events import RequestEvent, BatchEventRequest, EventResponse

logger = logging.getLogger(__name__)

events_bp = Blueprint("events", __name__, url_prefix=f"{settings.API_PREFIX}/events")


@events_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint"""
    stats = get_store().stats()
    return jsonify({"status": "healthy", "k": stats["k"], "distinct": stats["distinct"]}), 200


@events_bp.route("", methods=["POST"])
def submit_event():
    """
    Record a single handled request

    Request Body:
    {
      "ip": "192.168.1.1",
      "timestamp": "2025-10-16T10:30:00Z"
    }

    Response:
    {
      "success": true,
      "event_id": "uuid",
      "message": "Event processed successfully"
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")

        event = RequestEvent(**data)
        get_processor().process_event(event)

        return (
            jsonify(
                EventResponse(
                    success=True,
                    event_id=str(uuid.uuid4()),
                    message="Event processed successfully",
                ).model_dump()
            ),
            201,
        )

    except ValueError as e:
        logger.warning(f"Invalid event data: {e}")
        return (
            jsonify(
                EventResponse(
                    success=False, message=f"Invalid event data: {str(e)}"
                ).model_dump()
            ),
            400,
        )
    except Exception as e:
        logger.error(f"Error processing event: {e}", exc_info=True)
        return (
            jsonify(
                EventResponse(
                    success=False, message="Internal server error"
                ).model_dump()
            ),
            500,
        )


@events_bp.route("/batch", methods=["POST"])
def submit_batch():
    """
    Record multiple handled requests

    Request Body:
    {
      "events": [{"ip": "192.168.1.1"}, {"ip": "10.0.0.7"}]
    }

    Response:
    {
      "success": true,
      "processed": 2,
      "total": 2,
      "message": "Processed 2/2 events"
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")

        batch = BatchEventRequest(**data)
        processed = get_processor().process_batch(batch.events)

        return (
            jsonify(
                {
                    "success": True,
                    "processed": processed,
                    "total": len(batch.events),
                    "message": f"Processed {processed}/{len(batch.events)} events",
                }
            ),
            201,
        )

    except ValueError as e:
        logger.warning(f"Invalid batch data: {e}")
        return jsonify({"success": False, "message": f"Invalid batch data: {str(e)}"}), 400
    except Exception as e:
        logger.error(f"Error processing batch: {e}", exc_info=True)
        return jsonify({"success": False, "message": "Internal server error"}), 500


@events_bp.route("/stats", methods=["GET"])
def get_stats():
    """
    Get store statistics

    Response:
    {
      "k": 100,
      "occupancy": 42,
      "distinct": 42,
      "total": 1337,
      "threshold": 0
    }
    """
    try:
        return jsonify(get_store().stats()), 200
    except Exception as e:
        logger.error(f"Error getting stats: {e}", exc_info=True)
        return jsonify({"error": "Failed to get stats"}), 500
