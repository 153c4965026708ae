"""
Public page routes: home, property browsing, property detail and sign-in.
Failures are caught here and shown as toasts; pages never answer with an error envelope.
"""

from fastapi import APIRouter, Depends, Form, Query, Request
from typing import Literal, Optional
import logging
import uuid

from tumharaghar.config import settings
from tumharaghar.models.profile import UserRole
from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.pages import (
    AuthPage,
    HomePage,
    Notification,
    PropertiesPage,
    PropertyDetailPage
)
from tumharaghar.services.auth import SessionProvider, resolve_page_redirect
from tumharaghar.services.contact import price_label
from tumharaghar.services.property import PropertyService
from tumharaghar.services.search import filter_properties
from tumharaghar.utils.cookies import clear_session_cookie, set_session_cookie
from tumharaghar.utils.dependencies import get_property_service, get_session, get_session_provider
from tumharaghar.utils.exceptions import (
    APIException,
    ValidationError
)
from tumharaghar.views.property_card import build_property_card, placeholder_image
from tumharaghar.views.render import page_context, redirect_to, render_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])

LOAD_PROPERTIES_FAILED = "Failed to load properties. Please try again."
LOAD_DETAILS_FAILED = "Failed to load property details."
NO_PROPERTIES = "No properties found. Try adjusting your filters."
UNEXPECTED = "An unexpected error occurred. Please try again."


@router.get("/", summary="Home page")
async def home(
    request: Request,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    notifications = []
    featured = []
    try:
        records = await property_service.get_latest_properties()
        featured = [build_property_card(record, i) for i, record in enumerate(records)]
    except APIException:
        notifications.append(Notification.error("Error", LOAD_PROPERTIES_FAILED))

    page = HomePage(
        title=settings.app_name,
        tagline=settings.app_tagline,
        featured=featured,
        **page_context(request, session, *notifications)
    )
    return render_page(page, request)


@router.get("/properties", summary="Browse properties")
async def properties_page(
    request: Request,
    property_type: str = Query("all", alias="type"),
    search: str = Query(""),
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    """Fetch by type, refine by search text locally, render one card per listing."""
    notifications = []
    records = []
    try:
        type_filter = PropertyService.parse_property_type(property_type)
    except ValidationError as e:
        notifications.append(Notification.error("Error", e.detail))
        type_filter = None
    property_type = type_filter.value if type_filter else "all"

    try:
        records = await property_service.list_properties(type_filter)
    except APIException:
        notifications.append(Notification.error("Error", LOAD_PROPERTIES_FAILED))

    records = filter_properties(records, search)
    cards = [build_property_card(record, i) for i, record in enumerate(records)]

    page = PropertiesPage(
        title="Browse Properties",
        property_type=property_type,
        search=search,
        cards=cards,
        empty_message=None if cards else NO_PROPERTIES,
        **page_context(request, session, *notifications)
    )
    return render_page(page, request)


@router.get("/property/{property_id}", summary="Property detail")
async def property_detail_page(
    request: Request,
    property_id: str,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Listing detail with seller contact.

    The seller is fetched only after the listing; any failure sends the
    visitor back to the listing index.
    """
    try:
        record = await property_service.get_property_by_id(uuid.UUID(property_id), viewer=session)
        seller = await property_service.get_seller_profile(record.seller_id)
    except (APIException, ValueError) as e:
        logger.warning(f"Property detail {property_id} unavailable: {e}")
        return redirect_to("/properties", [Notification.error("Error", LOAD_DETAILS_FAILED)])

    page = PropertyDetailPage(
        title=record.title,
        property=record,
        seller=seller,
        price_label=price_label(record.price, record.property_type),
        contact=PropertyService.contact_links(record, seller),
        image_urls=[image.image_url for image in record.images] or [placeholder_image(0)],
        is_owner=session.user is not None and session.user.id == record.seller_id,
        **page_context(request, session)
    )
    return render_page(page, request)


@router.get("/auth", summary="Sign-in and sign-up page")
async def auth_page(
    request: Request,
    mode: Literal["sign-in", "sign-up"] = Query("sign-in"),
    session: Session = Depends(get_session)
):
    redirect = resolve_page_redirect(session, auth_page=True)
    if redirect:
        return redirect_to(redirect)

    page = AuthPage(
        title="Welcome to TUMHARAGHAR",
        mode=mode,
        role=UserRole.BUYER.value if mode == "sign-up" else None,
        **page_context(request, session)
    )
    return render_page(page, request)


def _auth_failure(
    request: Request,
    session: Session,
    error: Exception,
    failure_title: str,
    **fields
):
    """Re-render the auth page with the failure as a toast."""
    if isinstance(error, ValidationError):
        notification = Notification.error("Validation Error", error.detail)
        status_code = error.status_code
    elif isinstance(error, APIException):
        notification = Notification.error(failure_title, error.detail)
        status_code = error.status_code
    else:
        logger.exception(f"Unexpected auth failure: {error}")
        notification = Notification.error("Error", UNEXPECTED)
        status_code = 500

    page = AuthPage(
        title="Welcome to TUMHARAGHAR",
        error=notification.description,
        **fields,
        **page_context(request, session, notification)
    )
    return render_page(page, request, status_code=status_code)


@router.post("/auth/sign-in", summary="Sign in from the auth page")
async def sign_in_page(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    session: Session = Depends(get_session),
    provider: SessionProvider = Depends(get_session_provider)
):
    try:
        result = await provider.sign_in(email, password)
    except Exception as e:
        return _auth_failure(request, session, e, "Login Failed", mode="sign-in", email=email)

    response = redirect_to("/", [Notification.success("Welcome back!", "You have successfully logged in.")])
    set_session_cookie(response, result.access_token, result.expires_in)
    return response


@router.post("/auth/sign-up", summary="Sign up from the auth page")
async def sign_up_page(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    full_name: str = Form(""),
    role: str = Form(UserRole.BUYER.value),
    phone: Optional[str] = Form(None),
    session: Session = Depends(get_session),
    provider: SessionProvider = Depends(get_session_provider)
):
    fields = {"mode": "sign-up", "email": email, "full_name": full_name, "role": role, "phone": phone}
    try:
        result = await provider.sign_up(email, password, full_name, role, phone)
    except Exception as e:
        return _auth_failure(request, session, e, "Signup Failed", **fields)

    response = redirect_to("/", [Notification.success("Account Created!", "You have successfully signed up.")])
    set_session_cookie(response, result.access_token, result.expires_in)
    return response


@router.post("/auth/sign-out", summary="Sign out")
async def sign_out_page(
    session: Session = Depends(get_session),
    provider: SessionProvider = Depends(get_session_provider)
):
    await provider.sign_out(session)
    response = redirect_to("/")
    clear_session_cookie(response)
    return response
