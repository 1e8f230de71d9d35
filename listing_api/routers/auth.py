"""
Authentication API endpoints for signup, signin, registration keys and the current user.
"""

from fastapi import APIRouter, Depends, Path, status
from listing_api.models.user import UserRole
from listing_api.services.auth import AuthService
from listing_api.schemas.auth import (
    SignupRequest,
    SigninRequest,
    ProductKeyRequest,
    TokenResponse,
    ProductKeyResponse,
    CurrentUserResponse
)
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import (
    get_auth_service,
    get_current_identity,
    require_roles
)
from listing_api.utils.guards import CallerIdentity


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup/{role}",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account with the given role. ADMIN and REALTOR signups require a product key.",
    responses=get_error_responses(401, 409, 422)
)
async def signup(
    signup_data: SignupRequest,
    role: UserRole = Path(..., description="Role of the new account"),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    """
    Register a new user and return a session token.

    Raises:
        InvalidProductKeyError: If a privileged role is requested without a valid key
        DuplicateResourceError: If the email is already registered
    """
    token = await auth_service.signup(signup_data, role)
    return TokenResponse(token=token)


@router.post(
    "/signin",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    description="Authenticate with email and password, returns a session token",
    responses=get_error_responses(400, 422)
)
async def signin(
    signin_data: SigninRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    token = await auth_service.signin(signin_data.email, signin_data.password)
    return TokenResponse(token=token)


@router.post(
    "/key",
    response_model=ProductKeyResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate product key",
    description="Issue a registration key for an email and role. Admin only.",
    responses=get_error_responses(401, 422)
)
async def generate_product_key(
    key_request: ProductKeyRequest,
    identity: CallerIdentity = Depends(require_roles(UserRole.ADMIN, action="generate product keys")),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProductKeyResponse:
    """Issue a registration key that the recipient presents at signup."""
    product_key = auth_service.generate_product_key(key_request.email, key_request.role)
    return ProductKeyResponse(product_key=product_key)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    responses=get_error_responses(401)
)
async def get_me(
    identity: CallerIdentity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service)
) -> CurrentUserResponse:
    user = await auth_service.get_user(identity.id)
    return CurrentUserResponse.model_validate(user)
