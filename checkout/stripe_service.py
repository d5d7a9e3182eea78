import json
import os
from pathlib import Path
from dotenv import load_dotenv
import stripe

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")

stripe.api_key = os.getenv("STRIPE_SECRET_KEY")
if os.getenv("STRIPE_API_VERSION"):
    stripe.api_version = os.getenv("STRIPE_API_VERSION")

stripe.set_app_info(
    "subscription-checkout",
    version="0.1.0",
    url="https://github.com/stripe-samples/subscriptions-with-card-and-direct-debit",
)

PAYMENT_METHOD_TYPES = ["card", "au_becs_debit"]


def plan_id():
    return os.getenv("SUBSCRIPTION_PLAN_ID")


def to_json(obj):
    """Plain-dict view of a Stripe object, safe to hand to a JSON response."""
    if isinstance(obj, dict):
        return obj
    return json.loads(str(obj))


def retrieve_plan():
    return stripe.Plan.retrieve(plan_id())


def create_customer(name: str, email: str):
    return stripe.Customer.create(name=name, email=email)


def create_setup_intent(customer_id: str):
    # Card and BECS direct debit are both offered on the payment step
    return stripe.SetupIntent.create(
        payment_method_types=PAYMENT_METHOD_TYPES,
        customer=customer_id,
    )


def set_default_payment_method(customer_id: str, payment_method_id: str):
    return stripe.Customer.modify(
        customer_id,
        invoice_settings={"default_payment_method": payment_method_id},
    )


def create_subscription(customer_id: str):
    return stripe.Subscription.create(
        customer=customer_id,
        items=[{"price": plan_id()}],
        expand=["latest_invoice.payment_intent"],
    )
