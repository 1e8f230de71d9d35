"""
Listing API endpoints for search, management and buyer inquiries.
Role gates and ownership checks run as dependencies before each handler body.
"""

from fastapi import APIRouter, Depends, status, Query, Path, Response
from typing import Optional, List

from listing_api.models.listing import PropertyType
from listing_api.models.user import UserRole
from listing_api.repositories.listing import ListingSearchFilters
from listing_api.services.listing import ListingService
from listing_api.schemas.listing import (
    ListingCreate,
    ListingUpdate,
    ListingResponse,
    ListingSummary,
    ListingDetailResponse
)
from listing_api.schemas.message import (
    InquireRequest,
    MessageResponse,
    ListingMessageResponse
)
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import (
    get_listing_service,
    require_roles,
    require_listing_owner
)
from listing_api.utils.guards import CallerIdentity


router = APIRouter(prefix="/listings", tags=["Listings"])


@router.get(
    "",
    response_model=List[ListingSummary],
    status_code=status.HTTP_200_OK,
    summary="Search listings",
    description="Search listings by city, price range and property type. Responds 404 when nothing matches.",
    responses=get_error_responses(404, 422)
)
async def search_listings(
    city: Optional[str] = Query(None, description="City, matched exactly"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price, inclusive"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price, inclusive"),
    property_type: Optional[PropertyType] = Query(None, description="Property type"),
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingSummary]:
    """
    Search listings. Each result carries the url of the listing's first image.

    Raises:
        NotFoundError: If no listing matches
        ValidationError: If min_price exceeds max_price
    """
    filters = ListingSearchFilters(
        city=city,
        min_price=min_price,
        max_price=max_price,
        property_type=property_type
    )

    results = await listing_service.search(filters)

    return [
        ListingSummary.model_validate(listing.to_dict(image=image))
        for listing, image in results
    ]


@router.get(
    "/{listing_id}",
    response_model=ListingDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get listing by ID",
    responses=get_error_responses(404, 422)
)
async def get_listing(
    listing_id: int = Path(..., description="Listing ID"),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingDetailResponse:
    listing = await listing_service.get_by_id(listing_id)
    return ListingDetailResponse.model_validate(listing.to_detail_dict())


@router.post(
    "",
    response_model=ListingDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Create a listing with its images. Requires the REALTOR role.",
    responses=get_error_responses(401, 422)
)
async def create_listing(
    listing_data: ListingCreate,
    identity: CallerIdentity = Depends(require_roles(UserRole.REALTOR, action="create listings")),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingDetailResponse:
    """Create a listing owned by the calling realtor."""
    listing = await listing_service.create(listing_data, identity.id)
    return ListingDetailResponse.model_validate(listing.to_detail_dict())


@router.put(
    "/{listing_id}",
    response_model=ListingResponse,
    status_code=status.HTTP_200_OK,
    summary="Update listing",
    description="Partially update a listing. Only the owning realtor may update it.",
    responses=get_error_responses(401, 404, 422)
)
async def update_listing(
    listing_data: ListingUpdate,
    listing_id: int = Path(..., description="Listing ID"),
    identity: CallerIdentity = Depends(
        require_listing_owner(UserRole.ADMIN, UserRole.REALTOR, action="update listings")
    ),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingResponse:
    listing = await listing_service.update(listing_id, listing_data)
    return ListingResponse.model_validate(listing)


@router.delete(
    "/{listing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete listing",
    description="Delete a listing together with its images and messages. Only the owning realtor may delete it.",
    responses=get_error_responses(401, 404)
)
async def delete_listing(
    listing_id: int = Path(..., description="Listing ID"),
    identity: CallerIdentity = Depends(
        require_listing_owner(UserRole.ADMIN, UserRole.REALTOR, action="delete listings")
    ),
    listing_service: ListingService = Depends(get_listing_service)
) -> Response:
    await listing_service.delete(listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{listing_id}/inquire",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send inquiry",
    description="Send a message to the realtor who owns the listing. Requires the BUYER role.",
    responses=get_error_responses(401, 404, 422)
)
async def inquire(
    inquiry: InquireRequest,
    listing_id: int = Path(..., description="Listing ID"),
    identity: CallerIdentity = Depends(require_roles(UserRole.BUYER, action="send inquiries")),
    listing_service: ListingService = Depends(get_listing_service)
) -> MessageResponse:
    message = await listing_service.inquire(listing_id, inquiry.message, identity)
    return MessageResponse.model_validate(message)


@router.get(
    "/{listing_id}/messages",
    response_model=List[ListingMessageResponse],
    status_code=status.HTTP_200_OK,
    summary="List inquiries",
    description="Get the messages sent about a listing. Only the owning realtor may read them.",
    responses=get_error_responses(401, 404)
)
async def list_messages(
    listing_id: int = Path(..., description="Listing ID"),
    identity: CallerIdentity = Depends(
        require_listing_owner(UserRole.REALTOR, action="read listing messages")
    ),
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingMessageResponse]:
    messages = await listing_service.list_messages(listing_id)
    return [ListingMessageResponse.model_validate(message.to_inbox_dict()) for message in messages]
