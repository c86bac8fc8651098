from flask import request, jsonify, current_app
from app.utils.validation import validate_schema
from app.schemas.shopper import TranslateRequest
from app.services.translation import translate_for_shopper
from . import shopper_bp


@shopper_bp.route("/translate", methods=["POST"])
@validate_schema(TranslateRequest)
def translate_for_me():
    user = request.user
    data: TranslateRequest = request.validated_data
    texts = translate_for_shopper(current_app.translation_service, user, data.all_texts())
    return jsonify({
        "status": "success",
        "language": user.preferred_language,
        "translation_enabled": bool(user.translation_enabled),
        "data": texts,
    }), 200
