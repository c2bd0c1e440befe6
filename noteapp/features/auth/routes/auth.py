from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteapp.features.auth.schemas.auth import (
    LoginRequest,
    SendOtpRequest,
    UserResponse,
    VerifyOtpRequest,
)
from noteapp.features.auth.services.auth_service import AuthService
from noteapp.features.auth.services.email_service import OtpMailer, get_mailer
from noteapp.platform.db.session import get_db
from noteapp.platform.response import api_response

router = APIRouter(tags=["Authentication"])


@router.post(
    "/send-otp",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Send a one-time passcode",
    description="Email a one-time passcode used to finish signup or to log in",
)
async def send_otp(
    request: SendOtpRequest,
    db: AsyncSession = Depends(get_db),
    mailer: OtpMailer = Depends(get_mailer),
):
    """
    Issue a passcode for the email and send it.
    - Requesting again replaces the previous code.
    - **name** / **dob** may be sent during signup and are remembered until verification.
    """
    auth_service = AuthService(db, mailer)
    await auth_service.request_otp(request.email, name=request.name, date_of_birth=request.dob)

    return api_response(
        message="OTP sent to your email",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "/verify-otp",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Complete signup",
    description="Verify the passcode, create the account and return a session token",
)
async def verify_otp(
    request: VerifyOtpRequest,
    db: AsyncSession = Depends(get_db),
):
    auth_service = AuthService(db)
    user, token = await auth_service.verify_signup(
        request.email, request.otp, name=request.name, date_of_birth=request.dob
    )

    return api_response(
        data={"token": token, "user": UserResponse.model_validate(user).model_dump()},
        message="Signup successful",
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/login",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Exchange a passcode for a session token for an existing account",
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    auth_service = AuthService(db)
    user, token = await auth_service.login(request.email, request.otp)

    return api_response(
        data={"token": token, "user": UserResponse.model_validate(user).model_dump()},
        message="Login successful",
        status_code=status.HTTP_200_OK,
    )
