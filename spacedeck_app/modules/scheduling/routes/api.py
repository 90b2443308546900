from flask import Blueprint, request, jsonify
from flask_login import login_required

from spacedeck_app.core.error_handlers import NotFoundError, ValidationError
from spacedeck_app.core.extensions import db
from spacedeck_app.models import Card, Collection
from spacedeck_app.modules.scheduling.services.due_service import DueCardService
from spacedeck_app.modules.scheduling.services.scheduler_service import SchedulerService

scheduling_api_bp = Blueprint('scheduling_api', __name__)


@scheduling_api_bp.route('/cards/<card_id>/review', methods=['POST'])
@login_required
def review_card(card_id):
    """
    Submit a review for a card.
    Input: {"rating": int (1=Again, 2=Hard, 3=Good, 4=Easy)}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'rating' not in data:
        raise ValidationError('rating is required', errors={'rating': 'missing'})

    result = SchedulerService.process_review(card_id, data['rating'])
    card = db.session.get(Card, card_id)

    return jsonify({
        'success': True,
        'nextReviewInDays': result.next_review_in_days,
        'card': card.to_dict() if card else None,
    }), 200


@scheduling_api_bp.route('/collections/<collection_id>/review', methods=['GET'])
@login_required
def due_cards(collection_id):
    """
    Cards due for review in a collection, oldest-due first.
    Query: ?limit=int (default 50)
    """
    if db.session.get(Collection, collection_id) is None:
        raise NotFoundError(f"Collection {collection_id} not found", resource='collection')

    raw_limit = request.args.get('limit')
    limit = None
    if raw_limit is not None:
        try:
            limit = int(raw_limit)
        except ValueError:
            raise ValidationError('limit must be a positive integer', errors={'limit': raw_limit}) from None

    cards = DueCardService.select_due(collection_id, limit=limit)
    return jsonify([card.to_dict() for card in cards]), 200


@scheduling_api_bp.route('/cards/<card_id>/preview', methods=['GET'])
@login_required
def preview_intervals(card_id):
    """
    Preview the next interval for each rating.
    Output: {"cardId": str, "previews": {"1": {...}, "2": {...}, ...}}
    """
    previews = SchedulerService.get_preview_intervals(card_id)
    return jsonify({
        'cardId': card_id,
        'previews': previews,
    }), 200
