from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from orderdesk import crud
from orderdesk.db import get_db
from orderdesk.models import Customer
from orderdesk.schemas import CustomerCreate
from orderdesk.schemas import CustomerPatch
from orderdesk.schemas import CustomerRead

router = APIRouter(tags=["customers"], default_response_class=JSONResponse)


@router.get("/customer", response_model=list[CustomerRead])
def list_customers(db: Session = Depends(get_db)):
    return db.query(Customer).order_by(Customer.id).all()


@router.post("/customer", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(data: CustomerCreate, db: Session = Depends(get_db)):
    return crud.create(db, Customer(**data.model_dump()), "customer")


@router.put("/customer/{id}", response_model=CustomerRead)
def replace_customer(id: int, data: CustomerCreate, db: Session = Depends(get_db)):
    customer = crud.get_or_404(db, Customer, id, "customer")
    return crud.update(db, customer, data.model_dump(exclude_unset=True), "customer")


@router.patch("/customer/{id}", response_model=CustomerRead)
def update_customer(id: int, data: CustomerPatch, db: Session = Depends(get_db)):
    customer = crud.get_or_404(db, Customer, id, "customer")
    return crud.update(db, customer, data.model_dump(exclude_unset=True), "customer")


@router.delete("/customer/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(id: int, db: Session = Depends(get_db)):
    customer = crud.get_or_404(db, Customer, id, "customer")
    crud.delete(db, customer, "customer")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
