"""
Top-K ranking API endpoints
"""
from flask import Blueprint, request, jsonify
import logging

from ipstore.api import get_store
from ipstore.config import settings
from ipstore.models.events import RankedAddress, TopKResponse

logger = logging.getLogger(__name__)

rankings_bp = Blueprint("rankings", __name__, url_prefix=f"{settings.API_PREFIX}/top")


@rankings_bp.route("", methods=["GET"])
def get_top():
    """
    Get the most active addresses

    Query params:
    - limit: Maximum number of addresses to return (default: k)

    Example:
    GET /api/v1/top?limit=3

    Response:
    {
      "k": 100,
      "occupancy": 57,
      "distinct": 57,
      "total": 912,
      "items": [
        {"rank": 1, "ip": "10.0.0.7", "count": 120},
        {"rank": 2, "ip": "192.168.1.1", "count": 98},
        {"rank": 3, "ip": "2001:db8::1", "count": 40}
      ]
    }
    """
    try:
        limit = request.args.get("limit", type=str)
        if limit is not None:
            if not limit.isdigit() or int(limit) < 1:
                raise ValueError("limit must be a positive integer")
            limit = int(limit)

        ranked, stats = get_store().snapshot()
        if limit is not None:
            ranked = ranked[:limit]

        return (
            jsonify(
                TopKResponse(
                    k=stats["k"],
                    occupancy=stats["occupancy"],
                    distinct=stats["distinct"],
                    total=stats["total"],
                    items=[
                        RankedAddress(rank=rank, ip=str(ip), count=count)
                        for rank, (ip, count) in enumerate(ranked, start=1)
                    ],
                ).model_dump()
            ),
            200,
        )

    except ValueError as e:
        logger.warning(f"Invalid top query: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error querying top addresses: {e}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500


@rankings_bp.route("", methods=["DELETE"])
def clear_top():
    """
    Forget every recorded request

    Response:
    {
      "success": true,
      "message": "Store cleared"
    }
    """
    try:
        get_store().clear()
        logger.info("IP store cleared via API")
        return jsonify({"success": True, "message": "Store cleared"}), 200
    except Exception as e:
        logger.error(f"Error clearing store: {e}", exc_info=True)
        return jsonify({"success": False, "message": "Internal server error"}), 500
