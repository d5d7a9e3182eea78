"""
Dispatch of Stripe billing events received on ``/webhook``.

Every handler only acknowledges the event in the log; nothing here touches
the checkout flow. See https://stripe.com/docs/billing/webhooks for the
events worth watching in a billing integration.
"""
import json
import logging

import stripe

logger = logging.getLogger(__name__)


class InvalidEvent(ValueError):
    pass


def _log_received(event_type, data_object):
    logger.info("Webhook received! %s", event_type)


def _log_created(event_type, data_object):
    logger.info("Webhook received! %s", event_type)
    kind = event_type.split(".")[-2]
    # Unverified events can carry any object shape
    if isinstance(data_object, dict):
        object_id = data_object.get("id")
    else:
        object_id = getattr(data_object, "id", None)
    logger.info("Successfully created %s: %s", kind, object_id)


HANDLERS = {
    "customer.created": _log_created,
    "customer.updated": _log_received,
    "setup_intent.created": _log_received,
    "invoice.upcoming": _log_received,
    "invoice.created": _log_received,
    "invoice.finalized": _log_received,
    "invoice.payment_succeeded": _log_received,
    "invoice.payment_failed": _log_received,
    "customer.subscription.created": _log_created,
}


def parse_event(payload: bytes, signature: str | None, secret: str | None):
    """Turn a raw webhook body into an event.

    With both a secret and a signature the body is verified first; otherwise
    it is taken as-is, which is only acceptable in local development.
    Raises ``InvalidEvent`` for anything that can't be used.
    """
    if secret and signature:
        try:
            event = stripe.Webhook.construct_event(payload, signature, secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            raise InvalidEvent(str(e)) from e
    else:
        logger.warning("Webhook secret or signature missing, event not verified")
        try:
            event = json.loads(payload)
        except ValueError as e:
            raise InvalidEvent("Invalid payload") from e

    try:
        event_type = event["type"]
        data_object = event["data"]["object"]
    except (KeyError, TypeError) as e:
        raise InvalidEvent("Event has no type or data object") from e

    return event_type, data_object


def dispatch(event_type: str, data_object):
    handler = HANDLERS.get(event_type)
    if handler is None:
        logger.debug("Unhandled event type %s", event_type)
        return
    handler(event_type, data_object)
