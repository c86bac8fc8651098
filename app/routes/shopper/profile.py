from flask import request, jsonify
from models.order import Order
from app.utils import transactional, error, internal_error_response
from app.utils.validation import validate_schema
from app.schemas.shopper import EditProfileRequest, LanguageRequest, TranslationToggleRequest
from app.services import i18n
from . import shopper_bp


def _profile_dict(user):
    lang = user.preferred_language or i18n.DEFAULT_LANGUAGE
    return {
        "phone": user.phone,
        "name": user.name,
        "language": {"code": lang, "name": i18n.language_name(lang)},
        "translation_enabled": bool(user.translation_enabled),
        "outstanding_amount": float(user.outstanding_amount or 0),
        "order_count": Order.query.filter_by(user_phone=user.phone).count(),
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


@shopper_bp.route("/profile", methods=["GET"])
def get_profile():
    return jsonify({"status": "success", "data": _profile_dict(request.user)}), 200


@shopper_bp.route("/profile/edit", methods=["POST"])
@validate_schema(EditProfileRequest)
def edit_profile():
    user = request.user
    data: EditProfileRequest = request.validated_data
    user.name = data.name
    try:
        with transactional("Failed to update profile"):
            pass
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "message": "Profile updated", "data": _profile_dict(user)}), 200


def _set_language(user, code):
    user.preferred_language = code
    try:
        with transactional("Failed to change language"):
            pass
    except Exception:
        return internal_error_response()
    return jsonify({
        "status": "success",
        "message": i18n.t("languageChanged", code),
        "data": _profile_dict(user),
    }), 200


@shopper_bp.route("/profile/language", methods=["POST"])
@validate_schema(LanguageRequest)
def change_language():
    data: LanguageRequest = request.validated_data
    if not i18n.is_supported(data.language):
        return error("Unsupported language", status=400)
    return _set_language(request.user, data.language)


@shopper_bp.route("/profile/language/cycle", methods=["POST"])
def cycle_language():
    user = request.user
    return _set_language(user, i18n.next_language(user.preferred_language))


@shopper_bp.route("/profile/translation", methods=["POST"])
@validate_schema(TranslationToggleRequest)
def toggle_translation():
    user = request.user
    data: TranslationToggleRequest = request.validated_data
    user.translation_enabled = data.enabled
    try:
        with transactional("Failed to update translation setting"):
            pass
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "data": _profile_dict(user)}), 200


@shopper_bp.route("/profile/outstanding/clear", methods=["POST"])
def clear_outstanding():
    user = request.user
    user.outstanding_amount = 0
    try:
        with transactional("Failed to clear outstanding amount"):
            pass
    except Exception:
        return internal_error_response()
    return jsonify({"status": "success", "message": "Outstanding amount cleared", "data": _profile_dict(user)}), 200
