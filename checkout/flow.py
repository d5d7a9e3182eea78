"""
Scripted checkout: the three steps of the checkout page as a Python object.

``CheckoutFlow`` walks signup -> payment -> complete against a running
Checkout API. It needs an HTTP session exposing ``get``/``post`` with
relative URLs, e.g. ``httpx.Client(base_url=...)`` or FastAPI's
``TestClient``.

Payment details are never handled here. ``submit_payment`` takes a
``confirm`` callable standing in for Stripe.js: it receives the SetupIntent
client secret, the payment method kind and the billing details, and returns
what ``stripe.confirmCardSetup`` / ``stripe.confirmAuBecsDebitSetup`` would,
either ``{"setupIntent": {...}}`` or ``{"error": {"message": ...}}``.

Usage:
    flow = CheckoutFlow(httpx.Client(base_url="http://localhost:4242"))
    flow.signup("Jenny Rosen", "jenny@example.com")
    subscription = flow.submit_payment(PaymentMethodKind.CARD, confirm)
"""
from enum import Enum


class CheckoutStep(str, Enum):
    SIGNUP = "signup"
    PAYMENT = "payment"
    COMPLETE = "complete"


class PaymentMethodKind(str, Enum):
    CARD = "card"
    AU_BECS_DEBIT = "au_becs_debit"


class InvalidTransition(Exception):
    pass


class PaymentConfirmationError(Exception):
    pass


class CheckoutFlow:
    def __init__(self, session):
        self.session = session
        self.plan = None
        self.publishable_key = None
        self.reset()

    def reset(self):
        """Back to an empty signup step, like reloading the page."""
        self.step = CheckoutStep.SIGNUP
        self.customer = None
        self.setup_intent = None
        self.billing_details = None
        self.subscription = None
        self.error = None

    def _require(self, step):
        if self.step != step:
            raise InvalidTransition(f"Expected step {step.value}, flow is at {self.step.value}")

    def load_config(self):
        response = self.session.get("/config")
        response.raise_for_status()
        data = response.json()
        self.publishable_key = data["publishableKey"]
        self.plan = data["plan"]
        return self.plan

    def signup(self, name: str, email: str):
        self._require(CheckoutStep.SIGNUP)

        response = self.session.post("/create-customer", json={"name": name, "email": email})
        response.raise_for_status()
        data = response.json()

        self.customer = data["customer"]
        self.setup_intent = data["setupIntent"]
        self.billing_details = {"name": name, "email": email}
        self.step = CheckoutStep.PAYMENT
        return data

    def submit_payment(self, kind: PaymentMethodKind, confirm):
        self._require(CheckoutStep.PAYMENT)
        self.error = None

        result = confirm(
            self.setup_intent["client_secret"],
            PaymentMethodKind(kind),
            self.billing_details,
        )
        if result.get("error"):
            self.error = result["error"].get("message") or "An error occurred"
            raise PaymentConfirmationError(self.error)

        payment_method_id = result["setupIntent"]["payment_method"]
        response = self.session.post(
            "/subscription",
            json={"customerId": self.customer["id"], "paymentMethodId": payment_method_id},
        )
        response.raise_for_status()

        self.subscription = response.json()
        self.step = CheckoutStep.COMPLETE
        return self.subscription
