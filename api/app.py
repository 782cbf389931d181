"""Flask REST API exposing the expense ledger."""

from __future__ import annotations

import os
from decimal import Decimal
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from ledger.exceptions import RecordNotFoundError, ValidationError
from ledger.observers import LoggingObserver
from ledger.services import TransactionService


def create_app(service: Optional[TransactionService] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    if service is None:
        service = TransactionService()
        service.register(LoggingObserver(app.logger))
    ledger = service

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _money(value: Decimal) -> str:
        return f"{value:.2f}"

    def _item(index: int, transaction) -> Dict[str, Any]:
        return {"index": index, **transaction.to_dict()}

    @app.get("/transactions")
    def list_transactions():
        transactions = ledger.list()
        return _success({
            "items": [_item(index, transaction) for index, transaction in enumerate(transactions)],
            "total": _money(ledger.total()),
            "matched_indices": ledger.matched_indices(),
        })

    @app.post("/transactions")
    def create_transaction():
        payload = _json_body()
        transaction = ledger.add(payload)
        return _success(transaction.to_dict(), 201)

    @app.get("/transactions/<int:index>")
    def get_transaction(index: int):
        transaction = ledger.get(index)
        return _success(_item(index, transaction))

    @app.delete("/transactions/<int:index>")
    def delete_transaction(index: int):
        ledger.remove(index)
        return _success({}, 204)

    @app.get("/filter")
    def get_filter():
        matched = ledger.matched_items()
        return _success({
            "indices": [index for index, _ in matched],
            "items": [_item(index, transaction) for index, transaction in matched],
        })

    @app.post("/filter")
    def apply_filter():
        payload = _json_body()
        indices = ledger.apply_filter(
            category=payload.get("category"),
            min_amount=payload.get("min_amount"),
            max_amount=payload.get("max_amount"),
        )
        return _success({"indices": indices})

    @app.delete("/filter")
    def clear_filter():
        ledger.clear_filter()
        return _success({}, 204)

    @app.get("/summary")
    def summary():
        data = ledger.summary()
        return _success({
            **data,
            "total": _money(data["total"]),
            "matched_total": _money(data["matched_total"]),
        })

    return app
