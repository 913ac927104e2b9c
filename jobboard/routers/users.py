import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.core.identity import Identity
from jobboard.database import get_db
from jobboard.dependencies import get_identity
from jobboard.schemas.user import CompanyUpdate, company_to_response
from jobboard.services import user_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/company")
def get_company(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    company = user_service.get_company(db, identity.user_id)
    return {"company": company_to_response(company) if company else None}


@router.put("/company")
def upsert_company(
    body: CompanyUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    """Create the caller's company profile on first call, update it afterwards."""
    company = user_service.upsert_company(db, identity, body)
    return {"message": "Company profile saved", "company": company_to_response(company)}


@router.get("/stats")
def get_stats(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    return {"stats": user_service.get_user_stats(db, identity)}


@router.delete("/account")
def delete_account(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
):
    user_service.delete_account(db, identity)
    return {"message": "Account deleted"}
