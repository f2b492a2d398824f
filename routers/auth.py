from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from db.database import get_db
from db.models import User
from services.auth_service import authenticate_user, create_token_for_user, get_current_user, register_user, update_profile
from logger_manager import log_info, log_error
from interfaces.authModels import LoginRequest, ProfileUpdate, UserCreate
from utils.errors import AppError, ServerFault
from utils.report_utils import user_profile

router = APIRouter()


@router.post("/register", status_code=201)
def register(user: UserCreate, db: Session = Depends(get_db)):
    log_info("Register endpoint called")
    try:
        db_user = register_user(db, user)
        log_info("User registered successfully")
        return {"success": True, "token": create_token_for_user(db_user), "user": user_profile(db_user)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in register endpoint: {str(e)}", e)
        raise ServerFault("Server error during registration")


@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    log_info("Login endpoint called")
    try:
        user = authenticate_user(db, credentials.email, credentials.password)
        log_info("User logged in successfully")
        return {"success": True, "token": create_token_for_user(user), "user": user_profile(user)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in login endpoint: {str(e)}", e)
        raise ServerFault("Server error during login")


@router.get("/profile")
def read_profile(current_user: User = Depends(get_current_user)):
    log_info("Read profile endpoint called")
    return {"success": True, "user": user_profile(current_user)}


@router.put("/profile")
def edit_profile(profile: ProfileUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_info("Update profile endpoint called")
    try:
        user = update_profile(db, current_user, profile)
        return {"success": True, "user": user_profile(user)}
    except AppError:
        raise
    except Exception as e:
        log_error(f"Error in update_profile endpoint: {str(e)}", e)
        raise ServerFault("Server error updating profile")
