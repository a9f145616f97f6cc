"""
Checkout Router

GET reconciles the cart for the order summary; POST validates the phone
number, places the order and clears the cart.
"""
from fastapi import APIRouter, Depends, HTTPException

from eventhub.cart import CartReconciler, CheckoutLoader
from eventhub.checkout import CheckoutSubmission, SubmissionStatus
from eventhub.errors import ERROR_PLACE_ORDER, CartLoadError, TransportError
from eventhub.logging import get_logger
from .deps import get_checkout_submission, get_reconciler
from .errors import to_http_exception
from .models import CheckoutRequest

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.get("/checkout")
async def get_checkout(reconciler: CartReconciler = Depends(get_reconciler)):
    """Order summary: reconciled line items and total."""
    state = await CheckoutLoader(reconciler).load()
    if not state.ok:
        raise HTTPException(status_code=502, detail=state.error)
    return state.cart.to_dict()


@router.post("/checkout")
async def submit_checkout(
    request: CheckoutRequest,
    reconciler: CartReconciler = Depends(get_reconciler),
    submission: CheckoutSubmission = Depends(get_checkout_submission),
):
    """Place the order for the current cart."""
    try:
        result = await submission.reconcile_and_submit(reconciler, request.phone)
    except CartLoadError as e:
        raise to_http_exception(e)
    except TransportError as e:
        logger.error(f"Order placement failed: {e.message}")
        raise to_http_exception(e, ERROR_PLACE_ORDER)

    if result.status == SubmissionStatus.INVALID:
        raise HTTPException(status_code=422, detail=result.errors)
    if result.status in (SubmissionStatus.EMPTY_CART, SubmissionStatus.IN_FLIGHT):
        raise HTTPException(status_code=409, detail=result.message)

    return {"status": result.status.value, "message": result.message}
