import logging
from datetime import timedelta
from sqlalchemy.orm import Session
from app.config import settings
from app.database import commit_or_fail
from app.exceptions import NotFoundError, ConflictError, AuthenticationError, UnauthorizedError
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate
from app.utils.security import get_password_hash, verify_password, create_access_token

logger = logging.getLogger(__name__)


def is_admin(user: User) -> bool:
    """Admins are users with the admin role or the reserved admin username"""
    if user is None:
        return False
    return user.role == UserRole.ADMIN or user.username == settings.ADMIN_USERNAME


def ensure_owner_or_admin(user: User, owner_id: int, message: str = "Not allowed to access this resource") -> None:
    if user.id != owner_id and not is_admin(user):
        raise UnauthorizedError(message, details={"owner_id": owner_id})


def register_user(db: Session, user_data: UserCreate) -> User:
    """Register a new user"""
    if db.query(User).filter(User.username == user_data.username).first():
        raise ConflictError("Username already taken", details={"username": user_data.username})

    if db.query(User).filter(User.email == user_data.email).first():
        raise ConflictError("Email already registered", details={"email": user_data.email})

    user = User(
        username=user_data.username,
        password_hash=get_password_hash(user_data.password),
        name=user_data.name,
        email=user_data.email,
        address=user_data.address,
        city=user_data.city,
        postal_code=user_data.postal_code,
        role=UserRole.ADMIN if user_data.username == settings.ADMIN_USERNAME else UserRole.USER
    )

    db.add(user)
    commit_or_fail(db, "register user")
    db.refresh(user)

    logger.info(f"User {user.id} registered ({user.role.value})")
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Authenticate user and return user object"""
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise NotFoundError("User not found", details={"username": username})

    if not verify_password(password, user.password_hash):
        raise AuthenticationError("Incorrect password")

    return user


def create_token(user: User) -> str:
    """Create the access token for a user"""
    return create_access_token(
        data={"sub": str(user.id), "username": user.username},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )


def update_user(db: Session, current_user: User, user_id: int, user_data: UserUpdate) -> User:
    """Update a user's profile; only the user themselves or an admin may do it"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found", details={"id": user_id})

    ensure_owner_or_admin(current_user, user_id, message="Not allowed to update this user")

    update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)

    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        taken = db.query(User).filter(User.email == new_email, User.id != user_id).first()
        if taken:
            raise ConflictError("Email already registered", details={"email": new_email})

    password = update_data.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    for key, value in update_data.items():
        setattr(user, key, value)

    commit_or_fail(db, "update user")
    db.refresh(user)

    logger.info(f"User {user_id} updated by {current_user.id}")
    return user
