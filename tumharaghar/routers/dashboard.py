"""
Dashboard page routes for buyers and sellers.
Sellers manage their listings here: create, edit and the confirmed delete flow.
"""

from fastapi import APIRouter, Depends, Form, Request, status
from pydantic import ValidationError as PydanticValidationError
from typing import List, Optional
import logging
import uuid

from tumharaghar.models.profile import UserRole
from tumharaghar.models.property import PropertyType
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.pages import (
    BuyerDashboardPage,
    DashboardCard,
    DeleteConfirmation,
    Notification,
    PropertyFormPage,
    SellerDashboardPage,
    SellerListingRow
)
from tumharaghar.schemas.property import PropertyForm, PropertyRecord, PropertyUpdateForm
from tumharaghar.services.auth import resolve_page_redirect
from tumharaghar.services.deletion import DeletionFlow
from tumharaghar.services.property import PropertyService
from tumharaghar.utils.auth import create_confirmation_token, verify_confirmation_token
from tumharaghar.utils.dependencies import get_property_service, get_session
from tumharaghar.utils.exceptions import APIException, ValidationError
from tumharaghar.views.property_card import build_property_card
from tumharaghar.views.render import page_context, redirect_to, render_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dashboards"])

SELLER_DASHBOARD = "/seller-dashboard"
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this property? This action cannot be undone."
DELETE_FAILED = "Failed to delete property."


def _delete_path(property_id: uuid.UUID) -> str:
    return f"{SELLER_DASHBOARD}/properties/{property_id}/delete"


@router.get("/buyer-dashboard", summary="Buyer dashboard")
async def buyer_dashboard(request: Request, session: Session = Depends(get_session)):
    redirect = resolve_page_redirect(session, UserRole.BUYER)
    if redirect:
        return redirect_to(redirect)

    page = BuyerDashboardPage(
        title="Buyer Dashboard",
        welcome="Welcome back! Find your dream property",
        cards=[
            DashboardCard(
                title="Browse Properties",
                description="Explore our curated collection of properties for rent and sale.",
                href="/properties"
            )
        ],
        **page_context(request, session)
    )
    return render_page(page, request)


async def _render_seller_dashboard(
    request: Request,
    session: Session,
    property_service: PropertyService,
    pending_id: Optional[uuid.UUID] = None,
    notifications: Optional[List[Notification]] = None
):
    notifications = list(notifications or [])
    records: List[PropertyRecord] = []
    try:
        records = await property_service.list_own_properties(session)
    except APIException:
        notifications.append(Notification.error("Error", "Failed to load your properties."))

    listings = [
        SellerListingRow(
            card=build_property_card(record, i),
            status=record.status.value,
            edit_href=f"/edit-property/{record.id}",
            delete_action=_delete_path(record.id)
        )
        for i, record in enumerate(records)
    ]

    pending_delete = None
    if pending_id is not None:
        flow = DeletionFlow.pending(pending_id)
        pending = next((r for r in records if r.id == flow.pending_id), None)
        if pending is None:
            notifications.append(Notification.error("Error", DELETE_FAILED))
        else:
            pending_delete = DeleteConfirmation(
                property_id=pending.id,
                title=pending.title,
                message=DELETE_CONFIRM_MESSAGE,
                confirmation_token=create_confirmation_token(session.user.id, pending.id),
                confirm_action=f"{_delete_path(pending.id)}/confirm",
                cancel_action=f"{_delete_path(pending.id)}/cancel"
            )

    page = SellerDashboardPage(
        title="Seller Dashboard",
        welcome="Manage your property listings",
        listings=listings,
        empty_message=None if listings else "You haven't created any properties yet.",
        pending_delete=pending_delete,
        **page_context(request, session, *notifications)
    )
    return render_page(page, request)


@router.get(SELLER_DASHBOARD, summary="Seller dashboard")
async def seller_dashboard(
    request: Request,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)
    return await _render_seller_dashboard(request, session, property_service)


@router.post(SELLER_DASHBOARD + "/properties/{property_id}/delete", summary="Ask to delete a listing")
async def request_delete(
    request: Request,
    property_id: uuid.UUID,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    """Show the dashboard with the confirmation prompt; nothing is deleted yet."""
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)
    return await _render_seller_dashboard(request, session, property_service, pending_id=property_id)


@router.post(SELLER_DASHBOARD + "/properties/{property_id}/delete/confirm", summary="Confirm a delete")
async def confirm_delete(
    property_id: uuid.UUID,
    confirmation_token: str = Form(""),
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Delete the listing the confirmation token was issued for.

    Without a valid token for this seller and listing nothing is deleted.
    """
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    if not verify_confirmation_token(confirmation_token, session.user.id, property_id):
        logger.warning(f"Delete of property {property_id} confirmed without a valid token")
        return redirect_to(SELLER_DASHBOARD, [Notification.error("Error", DELETE_FAILED)])

    flow = DeletionFlow.pending(property_id)
    notification = await flow.confirm(
        lambda pending_id: property_service.delete_property(pending_id, session)
    )
    return redirect_to(SELLER_DASHBOARD, [notification])


@router.post(SELLER_DASHBOARD + "/properties/{property_id}/delete/cancel", summary="Cancel a delete")
async def cancel_delete(property_id: uuid.UUID, session: Session = Depends(get_session)):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    DeletionFlow.pending(property_id).cancel()
    return redirect_to(SELLER_DASHBOARD)


def _form_values(record: Optional[PropertyRecord] = None) -> dict:
    if record is None:
        return {"property_type": PropertyType.RENT.value, "bedrooms": "0", "bathrooms": "0"}
    values = PropertyForm.model_validate(record.model_dump(exclude={"price"})).model_dump()
    values["price"] = str(record.price)
    values["status"] = record.status.value
    return values


def _form_page(
    request: Request,
    session: Session,
    title: str,
    action: str,
    submit_label: str,
    values: dict,
    *notifications: Notification,
    error: Optional[ValidationError] = None
) -> PropertyFormPage:
    field = error.field_errors[0]["field"] if error is not None and error.field_errors else None
    return PropertyFormPage(
        title=title,
        action=action,
        submit_label=submit_label,
        values=values,
        show_availability=values.get("property_type", PropertyType.RENT.value) == PropertyType.RENT.value,
        error=error.detail if error is not None else None,
        error_field=field,
        **page_context(request, session, *notifications)
    )


def _submission_failure(error: Exception, fallback: str):
    """Toast and status for a failed form submission."""
    if isinstance(error, ValidationError):
        return Notification.error("Validation Error", error.detail), error.status_code
    if isinstance(error, APIException):
        return Notification.error("Error", fallback), error.status_code
    logger.exception(f"Unexpected form submission failure: {error}")
    return Notification.error("Error", fallback), status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("/create-property", summary="New listing form")
async def create_property_page(request: Request, session: Session = Depends(get_session)):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    page = _form_page(request, session, "List a Property", "/create-property", "Create Listing", _form_values())
    return render_page(page, request)


@router.post("/create-property", summary="Submit a new listing")
async def submit_create_property(
    request: Request,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    submitted = dict(await request.form())
    form = PropertyForm.model_validate(submitted)
    try:
        await property_service.create_property(form.model_dump(), session)
    except Exception as e:
        notification, status_code = _submission_failure(e, "Failed to create property listing.")
        page = _form_page(
            request, session, "List a Property", "/create-property", "Create Listing",
            form.model_dump(), notification,
            error=e if isinstance(e, ValidationError) else None
        )
        return render_page(page, request, status_code=status_code)

    return redirect_to(SELLER_DASHBOARD, [Notification.success("Success!", "Your property has been listed.")])


@router.get("/edit-property/{property_id}", summary="Edit listing form")
async def edit_property_page(
    request: Request,
    property_id: uuid.UUID,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    try:
        record = await property_service.get_own_property(property_id, session)
    except APIException:
        return redirect_to(SELLER_DASHBOARD, [Notification.error("Error", "Failed to load property details.")])

    page = _form_page(
        request, session, "Edit Property", f"/edit-property/{property_id}", "Save Changes",
        _form_values(record)
    )
    return render_page(page, request)


@router.post("/edit-property/{property_id}", summary="Submit listing changes")
async def submit_edit_property(
    request: Request,
    property_id: uuid.UUID,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    redirect = resolve_page_redirect(session, UserRole.SELLER)
    if redirect:
        return redirect_to(redirect)

    submitted = {k: v for k, v in (await request.form()).items() if not (k == "status" and not v)}
    try:
        changes = PropertyUpdateForm.model_validate(submitted).model_dump(exclude_unset=True)
        await property_service.update_property(property_id, changes, session)
    except PydanticValidationError as e:
        error = ValidationError.for_field("status", "Status must be active, inactive, rented or sold")
        logger.debug(f"Rejected listing status: {e}")
        notification, status_code = _submission_failure(error, "Failed to update property.")
        page = _form_page(
            request, session, "Edit Property", f"/edit-property/{property_id}", "Save Changes",
            submitted, notification, error=error
        )
        return render_page(page, request, status_code=status_code)
    except Exception as e:
        notification, status_code = _submission_failure(e, "Failed to update property.")
        page = _form_page(
            request, session, "Edit Property", f"/edit-property/{property_id}", "Save Changes",
            submitted, notification,
            error=e if isinstance(e, ValidationError) else None
        )
        return render_page(page, request, status_code=status_code)

    return redirect_to(SELLER_DASHBOARD, [Notification.success("Success", "Property updated successfully.")])
