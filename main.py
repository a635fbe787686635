from flask import Flask, request, jsonify
from flask_cors import CORS
from roi_engine import DealEvaluator, FinancialInputs
from roi_engine import config
from roi_engine.config import VerdictPolicy
from roi_engine.report import ReportOptions, ReportSession
from roi_engine.storage import store_for_client
from roi_engine.subscribe import SubscriptionError, make_subscription_client
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes
CORS(app)

# Last inputs are kept per client, one file each under STORE_DIR
app.config["STORE_DIR"] = config.STORE_DIR

# Initialize the deal evaluator
evaluator = DealEvaluator(VerdictPolicy.from_env())

CLIENT_ID_HEADER = "X-Client-Id"


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Rental ROI Calculator API",
        "version": "1.0",
        "endpoints": {
            "evaluate_deal": "/evaluate_deal [POST]",
            "report": "/report [POST]",
            "last_inputs": "/last_inputs [GET]",
            "subscribe": "/subscribe [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/evaluate_deal", methods=["POST"])
def evaluate_deal():
    """
    Evaluate a rental deal and remember its inputs for the next visit
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data or not isinstance(input_data, dict):
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        result = evaluator.evaluate_from_dict(input_data)
        _remember(input_data)

        return jsonify(result), 200

    except ValueError as e:
        # InsufficientDataError and other input problems
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Evaluation error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during evaluation",
            "status": "failed"
        }), 500


@app.route("/report", methods=["POST"])
def report():
    """Plain-text report, plus a mailto draft when an email is given"""
    try:
        body = request.get_json(force=True, silent=True)
        if not body or not isinstance(body, dict):
            return jsonify({"error": "No input data provided", "status": "failed"}), 400

        inputs_data = body.get("inputs") or {}
        options_data = body.get("options") or {}
        if not isinstance(inputs_data, dict) or not isinstance(options_data, dict):
            return jsonify({
                "error": "inputs and options must be JSON objects",
                "status": "validation_failed"
            }), 400

        options = ReportOptions.from_dict(options_data)
        session = ReportSession(evaluator)
        metrics = session.calculate(inputs_data)

        email = str(body.get("email") or "").strip()
        mailto = session.email_draft(email, options) if email else None

        return jsonify({
            "report": session.copy_text(options),
            "mailto": mailto,
            "metrics": evaluator.output_builder.build(session.last_inputs, metrics)
        }), 200

    except ValueError as e:
        # InsufficientDataError or a malformed email
        logger.error(f"Validation error: {str(e)}")
        return jsonify({"error": str(e), "status": "validation_failed"}), 400

    except Exception as e:
        logger.error(f"Report error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred while building the report",
            "status": "failed"
        }), 500


@app.route("/last_inputs", methods=["GET"])
def last_inputs():
    """Inputs this client evaluated most recently, or null when none are stored"""
    store = _client_store()
    if store is None:
        return jsonify({"error": f"{CLIENT_ID_HEADER} header is required"}), 400

    record = store.load_record()
    if record is None:
        return jsonify({"inputs": None, "saved_at": None}), 200
    return jsonify({
        "inputs": FinancialInputs.from_dict(record["inputs"]).to_dict(),
        "saved_at": record.get("savedAt")
    }), 200


@app.route("/subscribe", methods=["POST"])
def subscribe():
    """Add an email to the newsletter"""
    body = request.get_json(force=True, silent=True) or {}
    email = body.get("email") if isinstance(body, dict) else None
    if not email:
        return jsonify({"error": "Email is required"}), 400

    client = make_subscription_client()
    if client is None:
        return jsonify({"error": "Subscription service is not configured"}), 503

    try:
        subscriber = client.subscribe(email)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except SubscriptionError as e:
        if e.status_code is not None:
            return jsonify({"error": e.detail}), 400
        return jsonify({"error": str(e)}), 502

    return jsonify({"success": True, "subscriber": subscriber}), 200


def _client_store():
    """Store for the calling client, or None without a usable client id."""
    return store_for_client(app.config["STORE_DIR"], request.headers.get(CLIENT_ID_HEADER))


def _remember(input_data: dict) -> None:
    """Storage failures never fail the evaluation."""
    store = _client_store()
    if store is None:
        return
    try:
        store.save(FinancialInputs.from_dict(input_data))
    except OSError as e:
        logger.warning(f"Could not store last inputs: {str(e)}")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
