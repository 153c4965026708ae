"""
Public property API endpoints for browsing, searching and viewing listings.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Literal, Optional
from uuid import UUID

from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.error import get_error_responses
from tumharaghar.schemas.property import (
    PropertyDetailResponse,
    PropertyListResponse,
    WhatsAppLinkResponse
)
from tumharaghar.services.contact import whatsapp_link
from tumharaghar.services.property import PropertyService
from tumharaghar.services.search import filter_properties
from tumharaghar.utils.dependencies import get_property_service, get_session


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List active properties",
    description="Active listings newest first, filtered by type and refined by a title/location search",
    responses=get_error_responses(502)
)
async def list_properties(
    property_type: Literal["all", "rent", "sale"] = Query("all", description="Listing type"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or location"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    """
    List active properties.

    Args:
        property_type: rent, sale or all
        search: Text matched against title and location
        property_service: Property service instance
    """
    records = await property_service.list_properties(
        PropertyService.parse_property_type(property_type)
    )
    records = filter_properties(records, search)
    return PropertyListResponse(properties=records, total=len(records))


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Get property details",
    description="Listing with images, its seller and contact links",
    responses=get_error_responses(404, 502)
)
async def get_property(
    property_id: UUID,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDetailResponse:
    """
    Get one listing and then its seller.

    Raises:
        NotFoundError: If the listing or its seller does not exist
    """
    record = await property_service.get_property_by_id(property_id, viewer=session)
    seller = await property_service.get_seller_profile(record.seller_id)
    return PropertyDetailResponse(
        property=record,
        seller=seller,
        contact=PropertyService.contact_links(record, seller)
    )


@router.get(
    "/{property_id}/contact/whatsapp",
    response_model=WhatsAppLinkResponse,
    summary="WhatsApp link for a listing",
    description="Chat link to the seller with a prefilled enquiry",
    responses=get_error_responses(404, 422, 502)
)
async def get_whatsapp_link(
    property_id: UUID,
    session: Session = Depends(get_session),
    property_service: PropertyService = Depends(get_property_service)
) -> WhatsAppLinkResponse:
    """
    Raises:
        ValidationError: If the seller has no phone number
    """
    record = await property_service.get_property_by_id(property_id, viewer=session)
    seller = await property_service.get_seller_profile(record.seller_id)
    return WhatsAppLinkResponse(
        url=whatsapp_link(seller.phone, record.title, record.price, record.property_type)
    )
