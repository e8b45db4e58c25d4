from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pengiriman.db.session import get_db
from pengiriman.schemas.auth import LoginRequest, TokenResponse
from pengiriman.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login_api(payload: LoginRequest, db: Session = Depends(get_db)):
    return AuthService(db).login(payload)
