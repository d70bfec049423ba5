"""Admin management of the verification criteria reviewers follow."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import NotFound

from models import db
from models.verification_criterion import CRITERION_USER_TYPES, VerificationCriterion
from utils.auth import require_admin
from utils.request_validation import (
    ValidationError,
    field_error,
    optional_text,
    parse_json_request,
)

criteria_bp = Blueprint("criteria", __name__)


def _get_criterion_or_404(criterion_id: str) -> VerificationCriterion:
    criterion = db.session.get(VerificationCriterion, criterion_id)
    if criterion is None:
        raise NotFound("Criterion not found.")
    return criterion


def _validate_criterion_payload(data: dict, partial: bool = False) -> dict:
    errors = []
    values: dict = {}

    user_type = data.get("user_type")
    if user_type is not None or not partial:
        if user_type not in CRITERION_USER_TYPES:
            errors.append(
                field_error("user_type", "user_type must be one of contractor, event_manager")
            )
        else:
            values["user_type"] = user_type

    if "criteria_name" in data or not partial:
        name = data.get("criteria_name")
        if not isinstance(name, str) or not name.strip():
            errors.append(field_error("criteria_name", "criteria_name is required"))
        else:
            values["criteria_name"] = name.strip()

    for key in ("description", "validation_rule"):
        if key in data:
            try:
                values[key] = optional_text(data, key) or ""
            except ValidationError as exc:
                errors.extend(exc.errors)

    if "is_required" in data:
        if not isinstance(data["is_required"], bool):
            errors.append(field_error("is_required", "is_required must be a boolean"))
        else:
            values["is_required"] = data["is_required"]

    if errors:
        raise ValidationError(errors)
    return values


@criteria_bp.route("", methods=["GET"])
def list_criteria():
    """List criteria, optionally for a single user type."""

    require_admin()
    query = VerificationCriterion.query
    user_type = request.args.get("user_type")
    if user_type:
        if user_type not in CRITERION_USER_TYPES:
            raise ValidationError(
                [field_error("user_type", "user_type must be one of contractor, event_manager")]
            )
        query = query.filter_by(user_type=user_type)
    criteria = query.order_by(
        VerificationCriterion.user_type, VerificationCriterion.created_at
    ).all()
    return jsonify([criterion.to_dict() for criterion in criteria])


@criteria_bp.route("", methods=["POST"])
def create_criterion():
    require_admin()
    values = _validate_criterion_payload(parse_json_request(request))
    criterion = VerificationCriterion(**values)
    db.session.add(criterion)
    db.session.commit()
    return jsonify(criterion.to_dict()), 201


@criteria_bp.route("/<criterion_id>", methods=["PUT"])
def update_criterion(criterion_id: str):
    require_admin()
    criterion = _get_criterion_or_404(criterion_id)
    values = _validate_criterion_payload(parse_json_request(request), partial=True)
    for key, value in values.items():
        setattr(criterion, key, value)
    db.session.commit()
    return jsonify(criterion.to_dict())


@criteria_bp.route("/<criterion_id>", methods=["DELETE"])
def delete_criterion(criterion_id: str):
    require_admin()
    criterion = _get_criterion_or_404(criterion_id)
    db.session.delete(criterion)
    db.session.commit()
    return "", 204
