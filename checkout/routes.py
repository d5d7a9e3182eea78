import logging
import os

import stripe
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from checkout.stripe_service import (
    create_customer,
    create_setup_intent,
    create_subscription,
    retrieve_plan,
    set_default_payment_method,
    to_json,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class CustomerRequest(BaseModel):
    name: str
    email: str


class SubscriptionRequest(BaseModel):
    customer_id: str = Field(alias="customerId")
    payment_method_id: str = Field(alias="paymentMethodId")


@router.get("/config")
def get_config():
    try:
        plan = retrieve_plan()
    except stripe.StripeError:
        logger.exception("Error fetching config")
        raise HTTPException(status_code=500, detail="Failed to fetch config")

    return {
        "publishableKey": os.getenv("STRIPE_PUBLISHABLE_KEY"),
        "plan": to_json(plan),
    }


@router.post("/create-customer")
def create_customer_api(request: CustomerRequest):
    try:
        customer = create_customer(request.name, request.email)
        setup_intent = create_setup_intent(customer["id"])
    except stripe.StripeError:
        logger.exception("Error creating customer")
        raise HTTPException(status_code=500, detail="Failed to create customer")

    return {"customer": to_json(customer), "setupIntent": to_json(setup_intent)}


@router.post("/subscription")
def create_subscription_api(request: SubscriptionRequest):
    # The first invoice is charged to the default payment method, so it has
    # to be set before the subscription exists.
    try:
        set_default_payment_method(request.customer_id, request.payment_method_id)
        subscription = create_subscription(request.customer_id)
    except stripe.StripeError:
        logger.exception("Error creating subscription for %s", request.customer_id)
        raise HTTPException(status_code=500, detail="Failed to create subscription")

    return to_json(subscription)
