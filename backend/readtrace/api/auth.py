"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from readtrace.database import get_db
from readtrace.dependencies import get_current_user
from readtrace.services.auth import AuthService, RegistrationError
from readtrace.schemas.user import RegisterRequest, UserLogin, LoginResponse, UserResponse
from readtrace.schemas.common import MessageResponse
from readtrace.models.user import User

router = APIRouter()


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return a JWT token for it."""
    auth = AuthService(db)
    try:
        user = auth.register(request.email, request.password, request.username)
    except RegistrationError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT if e.conflict else status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return LoginResponse(
        token=auth.create_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(request: UserLogin, db: Session = Depends(get_db)):
    """Authenticate user and return JWT token."""
    auth = AuthService(db)
    user = auth.authenticate(request.email, request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return LoginResponse(
        token=auth.create_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)):
    """Logout current user (client should discard token)."""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    """Get current user info."""
    return UserResponse.model_validate(user)
