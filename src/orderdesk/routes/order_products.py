from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from orderdesk import crud
from orderdesk.db import get_db
from orderdesk.models import OrderProduct
from orderdesk.schemas import OrderProductCreate
from orderdesk.schemas import OrderProductPatch
from orderdesk.schemas import OrderProductRead

router = APIRouter(tags=["order-products"], default_response_class=JSONResponse)

LABEL = "orderProduct"


@router.get("/order-product", response_model=list[OrderProductRead])
def list_order_products(db: Session = Depends(get_db)):
    return db.query(OrderProduct).order_by(OrderProduct.id).all()


@router.post("/order-product", response_model=OrderProductRead, status_code=status.HTTP_201_CREATED)
def create_order_product(data: OrderProductCreate, db: Session = Depends(get_db)):
    return crud.create(db, OrderProduct(**data.model_dump()), LABEL)


@router.put("/order-product/{id}", response_model=OrderProductRead)
def replace_order_product(id: int, data: OrderProductCreate, db: Session = Depends(get_db)):
    item = crud.get_or_404(db, OrderProduct, id, LABEL)
    return crud.update(db, item, data.model_dump(exclude_unset=True), LABEL)


@router.patch("/order-product/{id}", response_model=OrderProductRead)
def update_order_product(id: int, data: OrderProductPatch, db: Session = Depends(get_db)):
    item = crud.get_or_404(db, OrderProduct, id, LABEL)
    return crud.update(db, item, data.model_dump(exclude_unset=True), LABEL)


@router.delete("/order-product/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order_product(id: int, db: Session = Depends(get_db)):
    item = crud.get_or_404(db, OrderProduct, id, LABEL)
    crud.delete(db, item, LABEL)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
