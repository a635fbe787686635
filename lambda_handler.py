"""
AWS Lambda handler for the Rental ROI Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging

from roi_engine import DealEvaluator
from roi_engine.config import ENVIRONMENT, VerdictPolicy
from roi_engine.report import ReportOptions, ReportSession
from roi_engine.subscribe import SubscriptionError, make_subscription_client

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Initialize evaluator (reused across warm invocations)
evaluator = DealEvaluator(VerdictPolicy.from_env())

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def _response(status_code: int, payload) -> dict:
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(payload)}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /evaluate_deal
    - POST /report
    - POST /subscribe
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path == "/evaluate_deal" and http_method == "POST":
        return handle_evaluate_deal(event)
    elif path == "/report" and http_method == "POST":
        return handle_report(event)
    elif path == "/subscribe" and http_method == "POST":
        return handle_subscribe(event)
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Rental ROI Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "evaluate_deal": "/evaluate_deal [POST]",
                "report": "/report [POST]",
                "subscribe": "/subscribe [POST]",
                "health": "/health [GET]",
            },
        },
    )


def _parse_body(event):
    """
    Decode the request body. Returns None for an empty body.
    Raises json.JSONDecodeError for malformed JSON.
    """
    body = event.get("body", "")
    if isinstance(body, str):
        if not body:
            return None
        # Handle base64 encoded body (API Gateway)
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body)
    return body


def handle_evaluate_deal(event):
    """Evaluate a rental deal."""
    try:
        input_data = _parse_body(event)
        if not input_data:
            return _response(400, {"error": "No input data provided", "status": "failed"})

        result = evaluator.evaluate_from_dict(input_data)
        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, TypeError, AttributeError) as e:
        # InsufficientDataError, or a body that is not a JSON object
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected evaluation error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during evaluation", "status": "failed"})


def handle_report(event):
    """Text report for a deal, plus a mailto draft when an email is given."""
    try:
        body = _parse_body(event)
        if not body or not isinstance(body, dict):
            return _response(400, {"error": "No input data provided", "status": "failed"})

        inputs_data = body.get("inputs") or {}
        options_data = body.get("options") or {}
        if not isinstance(inputs_data, dict) or not isinstance(options_data, dict):
            raise ValueError("inputs and options must be JSON objects")

        options = ReportOptions.from_dict(options_data)
        session = ReportSession(evaluator)
        metrics = session.calculate(inputs_data)

        email = str(body.get("email") or "").strip()

        return _response(
            200,
            {
                "report": session.copy_text(options),
                "mailto": session.email_draft(email, options) if email else None,
                "metrics": evaluator.output_builder.build(session.last_inputs, metrics),
            },
        )

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, TypeError, AttributeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        logger.error(f"Unexpected report error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred while building the report", "status": "failed"})


def handle_subscribe(event):
    """Add an email to the newsletter. Never blocks report delivery on the client."""
    try:
        body = _parse_body(event) or {}
    except json.JSONDecodeError as e:
        return _response(400, {"error": f"Invalid JSON: {str(e)}"})

    email = body.get("email") if isinstance(body, dict) else None
    if not email:
        return _response(400, {"error": "Email is required"})

    client = make_subscription_client()
    if client is None:
        return _response(503, {"error": "Subscription service is not configured"})

    try:
        subscriber = client.subscribe(email)
    except ValueError as e:
        return _response(400, {"error": str(e)})
    except SubscriptionError as e:
        if e.status_code is not None:
            return _response(400, {"error": e.detail})
        return _response(502, {"error": str(e)})

    return _response(200, {"success": True, "subscriber": subscriber})
