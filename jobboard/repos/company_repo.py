from sqlalchemy.orm import Session

from jobboard.core.security import generate_id
from jobboard.models.company import Company

COMPANY_FIELDS = ("name", "description", "website", "size", "industry", "location", "logo")
DEFAULT_COMPANY_NAME = "My Company"


def get_by_owner(db: Session, owner_id: str) -> Company | None:
    return db.query(Company).filter(Company.owner_id == owner_id).first()


def create(db: Session, owner_id: str, **fields) -> Company:
    company = Company(id=generate_id(), owner_id=owner_id, name=fields.get("name") or DEFAULT_COMPANY_NAME)
    for key in COMPANY_FIELDS:
        if key != "name" and fields.get(key) is not None:
            setattr(company, key, fields[key])
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def update(db: Session, company: Company, **fields) -> Company:
    for key in COMPANY_FIELDS:
        if fields.get(key) is not None:
            setattr(company, key, fields[key])
    db.commit()
    db.refresh(company)
    return company
