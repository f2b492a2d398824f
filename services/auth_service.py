from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from db.database import get_db
from db.models import User
from db.repositories import UserRepository
from env import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from interfaces.authModels import Identity, TokenData, UserCreate, ProfileUpdate
from logger_manager import log_info, log_error, log_warning
from utils.errors import Unauthorized, ValidationFailure, field_error

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Optional scheme so a missing header is reported with our own 401 message
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_token_for_user(user: User) -> str:
    return create_access_token(data={"sub": str(user.id)})


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            log_error("Token missing 'sub' claim")
            raise _credentials_exception("Not authorized, token failed")
        return TokenData(user_id=int(subject))
    except (JWTError, ValueError) as e:
        log_warning(f"JWT verification failed: {str(e)}")
        raise _credentials_exception("Not authorized, token failed")


async def get_current_user(
    db: Session = Depends(get_db),
    oauth_token: str | None = Depends(oauth2_scheme_optional),
) -> User:
    """Resolve the bearer token to an active user, 401 otherwise."""
    if not oauth_token:
        raise _credentials_exception("Not authorized, no token provided")

    token_data = decode_access_token(oauth_token)

    user = UserRepository(db).get_by_id(token_data.user_id)
    if user is None:
        log_warning(f"User not found for token subject: {token_data.user_id}")
        raise _credentials_exception("Not authorized, user not found")

    if not user.is_active:
        raise _credentials_exception("Not authorized, account is deactivated")

    return user


async def get_current_identity(current_user: User = Depends(get_current_user)) -> Identity:
    return Identity(user_id=current_user.id, role=current_user.role, is_active=current_user.is_active)


def register_user(db: Session, user_create: UserCreate) -> User:
    log_info(f"Registering user: {user_create.email}")
    repo = UserRepository(db)
    if repo.get_by_email(user_create.email):
        raise ValidationFailure(
            "User already exists with this email",
            details=[field_error("email", "User already exists with this email")],
        )
    return repo.create(
        name=user_create.name,
        email=user_create.email,
        hashed_password=get_password_hash(user_create.password),
        company=user_create.company,
    )


def authenticate_user(db: Session, email: str, password: str) -> User:
    repo = UserRepository(db)
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.hashed_password):
        raise Unauthorized("Invalid credentials")
    if not user.is_active:
        raise Unauthorized("Account is deactivated")

    user.last_login = datetime.now()
    return repo.save(user)


def update_profile(db: Session, user: User, profile: ProfileUpdate) -> User:
    changes = profile.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(user, field, value)
    return UserRepository(db).save(user)
