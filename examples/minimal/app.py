"""Minimal example of activity-workflows integration.

This example demonstrates the basic usage of the WorkflowPlugin with an order
processing workflow: validation, a branch on the order size, payment with
failure routing, and fulfillment.

Run with:
    cd examples/minimal
    litestar run

Then:
    curl -X POST localhost:8000/workflows/order_processing/run \
        -H 'Content-Type: application/json' \
        -d '{"input": {"order_id": "A-1", "items": ["book"], "amount": 42}}'
"""

from __future__ import annotations

from typing import Any

from litestar import Litestar, get

from activity_workflows import (
    Activity,
    Choice,
    Failure,
    Workflow,
    WorkflowPlugin,
    WorkflowPluginConfig,
)

# =============================================================================
# Step Functions
# =============================================================================


async def validate_order(order: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
    """Validate the incoming order data."""
    if not order.get("order_id") or not order.get("items"):
        raise ValueError("InvalidOrder")
    context["order_id"] = order["order_id"]
    return order


async def route_by_amount(order: dict[str, Any], context: dict[str, Any]) -> str:
    """Send large orders through manual review."""
    return "review" if order.get("amount", 0) > 1000 else "pay"


async def review_order(order: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
    """Flag the order as reviewed."""
    context["reviewed"] = True
    return order


async def process_payment(order: dict[str, Any], context: dict[str, Any]) -> Any:
    """Charge the customer; declined cards fail without raising."""
    if order.get("card") == "declined":
        return Failure("PaymentDeclined")
    context["paid"] = order.get("amount", 0)
    return {"order_id": order["order_id"], "paid": True}


async def fulfill_order(payment: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
    """Ship the order."""
    return {"order_id": payment["order_id"], "status": "shipped"}


async def cancel_order(caught: Any, context: dict[str, Any]) -> dict[str, Any]:
    """Cancel an order whose payment failed."""
    return {"order_id": context.get("order_id"), "status": "cancelled", "reason": str(caught.error)}


# =============================================================================
# Workflow Definition
# =============================================================================

validate = Activity("validate_order", validate_order)
route = Choice("route_by_amount", route_by_amount)
payment = Activity("process_payment", process_payment)

validate.then(route)
validate.catch("InvalidOrder", None)
route.choice("review", Activity("review_order", review_order)).choice("pay", payment)
route.choices["review"].then(payment)  # type: ignore[union-attr]
payment.then(Activity("fulfill_order", fulfill_order))
payment.catch("Payment*", Activity("cancel_order", cancel_order))

order_workflow = Workflow(validate, name="order_processing", description="Validate, pay and ship an order")


# =============================================================================
# Application Setup
# =============================================================================


@get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


app = Litestar(
    route_handlers=[health_check],
    plugins=[WorkflowPlugin(config=WorkflowPluginConfig(auto_register_workflows=[order_workflow]))],
    debug=True,
)
