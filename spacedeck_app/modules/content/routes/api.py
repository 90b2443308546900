from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from spacedeck_app.core.error_handlers import success_response
from spacedeck_app.modules.content.schemas import (
    CardCreate,
    CardUpdate,
    CollectionCreate,
    parse_payload,
)
from spacedeck_app.modules.content.services.card_service import CardService
from spacedeck_app.modules.content.services.collection_service import CollectionService

content_api_bp = Blueprint('content_api', __name__)


# ==========================================
# 1. Collections
# ==========================================

@content_api_bp.route('/collections', methods=['GET'])
@login_required
def list_collections():
    """Collections of the calling user, newest first."""
    collections = CollectionService.list_for_user(current_user.user_id)
    return jsonify([collection.to_dict() for collection in collections]), 200


@content_api_bp.route('/collections', methods=['POST'])
@login_required
def create_collection():
    """
    Create a collection.
    Input: {"title": str, "description": str (optional)}
    """
    payload = parse_payload(CollectionCreate, request.get_json(silent=True))
    collection = CollectionService.create(
        user_id=current_user.user_id,
        title=payload.title,
        description=payload.description,
    )
    return jsonify({'id': collection.collection_id, 'title': collection.title}), 201


@content_api_bp.route('/collections/<collection_id>', methods=['GET'])
@login_required
def get_collection(collection_id):
    collection = CollectionService.get(collection_id)
    return jsonify(CollectionService.summary(collection)), 200


@content_api_bp.route('/collections/<collection_id>', methods=['DELETE'])
@login_required
def delete_collection(collection_id):
    """Delete a collection and every card in it."""
    CollectionService.delete(collection_id, user_id=current_user.user_id)
    return jsonify(success_response()), 200


@content_api_bp.route('/collections/<collection_id>/cards', methods=['GET'])
@login_required
def list_cards(collection_id):
    cards = CardService.list_for_collection(collection_id)
    return jsonify([card.to_dict() for card in cards]), 200


# ==========================================
# 2. Cards
# ==========================================

@content_api_bp.route('/cards', methods=['POST'])
@login_required
def create_card():
    """
    Create a card in a collection.
    Input: {"collectionId": str, "front": str, "back": str}
    """
    payload = parse_payload(CardCreate, request.get_json(silent=True))
    card = CardService.create(
        collection_id=payload.collection_id,
        front=payload.front,
        back=payload.back,
        user_id=current_user.user_id,
    )
    return jsonify({'id': card.card_id, 'status': 'created'}), 201


@content_api_bp.route('/cards/<card_id>', methods=['PUT'])
@login_required
def update_card(card_id):
    """
    Edit card content.
    Input: {"front": str (optional), "back": str (optional)}
    """
    payload = parse_payload(CardUpdate, request.get_json(silent=True))
    CardService.update_content(card_id, front=payload.front, back=payload.back)
    return jsonify(success_response()), 200


@content_api_bp.route('/cards/<card_id>', methods=['DELETE'])
@login_required
def delete_card(card_id):
    CardService.delete(card_id, user_id=current_user.user_id)
    return jsonify(success_response()), 200
