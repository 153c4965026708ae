"""
Seller listing management API endpoints.
Every route requires a signed-in seller and only touches that seller's listings.
"""

from fastapi import APIRouter, Depends, status
from uuid import UUID

from tumharaghar.schemas.auth import Session
from tumharaghar.schemas.error import get_crud_error_responses
from tumharaghar.schemas.property import (
    ImageCreate,
    PropertyForm,
    PropertyImageResponse,
    PropertyListResponse,
    PropertyRecord,
    PropertyUpdateForm
)
from tumharaghar.services.property import PropertyService
from tumharaghar.utils.dependencies import get_property_service, require_seller


router = APIRouter(prefix="/seller/properties", tags=["Seller Listings"])


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List own properties",
    description="All of the seller's listings, any status, newest first",
    responses=get_crud_error_responses()
)
async def list_own_properties(
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    records = await property_service.list_own_properties(session)
    return PropertyListResponse(properties=records, total=len(records))


@router.post(
    "",
    response_model=PropertyRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Validate and publish a new listing owned by the seller",
    responses=get_crud_error_responses()
)
async def create_property(
    form: PropertyForm,
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyRecord:
    """
    Create a listing.

    Raises:
        ValidationError: If a field breaks its rule; nothing is written
    """
    return await property_service.create_property(form.model_dump(), session)


@router.get(
    "/{property_id}",
    response_model=PropertyRecord,
    summary="Get own property",
    responses=get_crud_error_responses()
)
async def get_own_property(
    property_id: UUID,
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyRecord:
    return await property_service.get_own_property(property_id, session)


@router.patch(
    "/{property_id}",
    response_model=PropertyRecord,
    summary="Update property",
    description="Change only the submitted fields of one of the seller's listings",
    responses=get_crud_error_responses()
)
async def update_property(
    property_id: UUID,
    changes: PropertyUpdateForm,
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyRecord:
    return await property_service.update_property(
        property_id,
        changes.model_dump(exclude_unset=True),
        session
    )


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete property",
    description="Delete one of the seller's listings; its images go with it",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID,
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    """
    Raises:
        NotFoundError: If no listing with this id belongs to the seller
    """
    await property_service.delete_property(property_id, session)


@router.post(
    "/{property_id}/images",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach image",
    description="Attach an already stored image to a listing by URL",
    responses=get_crud_error_responses()
)
async def add_property_image(
    property_id: UUID,
    image: ImageCreate,
    session: Session = Depends(require_seller),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyImageResponse:
    return await property_service.add_property_image(
        property_id,
        image.image_url,
        session,
        display_order=image.display_order
    )
