# -*- coding: utf-8 -*-

"""
Flask blueprint with the translation relay.

* POST /api/translate – validates ``{text, target}``, asks the LLM provider
  for a translation and returns ``{translatedText}``.

Nothing is persisted here; storing the result is the caller's job.
"""

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from task_lingo_lib.data_models.constants import TRANSLATED_TEXT_PARAM
from task_lingo_lib.data_models.translation import TranslateRequestModel
from task_lingo_lib.exceptions import InvalidTranslationResponseError

from .errors import (
    error_as_dict,
    MISSING_INPUT,
    NO_VALID_TRANSLATION,
    INTERNAL_ERROR,
)
from .services import get_services

logger = logging.getLogger(__name__)

translate_bp = Blueprint("translate", __name__, url_prefix="/api")


def relay_translation(translator, payload: Any) -> Tuple[Dict[str, Any], int]:
    """
    Run one translation request and return ``(body, status)``.

    400 for missing input (the provider is not called), 502 when the provider
    answered without a translation, 500 for anything else.
    """
    try:
        try:
            params = TranslateRequestModel.model_validate(payload)
        except PydanticValidationError:
            return error_as_dict(MISSING_INPUT), 400

        translated = translator.translate(params.text, params.target)
        return {TRANSLATED_TEXT_PARAM: translated}, 200
    except InvalidTranslationResponseError as exc:
        logger.error("Translation provider returned invalid response: %s", exc.response)
        return error_as_dict(NO_VALID_TRANSLATION), 502
    except Exception as exc:
        logger.exception("Translation error: %s", exc)
        return error_as_dict(INTERNAL_ERROR), 500


@translate_bp.route("/translate", methods=["POST"])
def translate():
    try:
        payload = request.get_json(force=True)
    except Exception as exc:
        logger.error("Translation error: cannot parse request body: %s", exc)
        return jsonify(error_as_dict(INTERNAL_ERROR)), 500

    body, status = relay_translation(get_services().translator, payload)
    return jsonify(body), status
