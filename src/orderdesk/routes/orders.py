from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from orderdesk import crud
from orderdesk.db import get_db
from orderdesk.deps import get_broker
from orderdesk.event_broker import EventBroker
from orderdesk.models import Order
from orderdesk.schemas import OrderCreate
from orderdesk.schemas import OrderDetail
from orderdesk.schemas import OrderPatch
from orderdesk.schemas import OrderRead

router = APIRouter(tags=["orders"], default_response_class=JSONResponse)

NEW_ORDER_EVENT = "new_order"


@router.get("/order", response_model=list[OrderDetail])
def list_orders(db: Session = Depends(get_db)):
    return Order.with_details(db)


@router.post("/order", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    broker: EventBroker = Depends(get_broker),
):
    order = crud.create(db, Order(**data.model_dump()), "order")
    created = OrderRead.model_validate(order)
    await broker.publish(NEW_ORDER_EVENT, created)
    return created


@router.put("/order/{id}", response_model=OrderRead)
def replace_order(id: int, data: OrderCreate, db: Session = Depends(get_db)):
    order = crud.get_or_404(db, Order, id, "order")
    return crud.update(db, order, data.model_dump(exclude_unset=True), "order")


@router.patch("/order/{id}", response_model=OrderRead)
def update_order(id: int, data: OrderPatch, db: Session = Depends(get_db)):
    order = crud.get_or_404(db, Order, id, "order")
    return crud.update(db, order, data.model_dump(exclude_unset=True), "order")


@router.delete("/order/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(id: int, db: Session = Depends(get_db)):
    order = crud.get_or_404(db, Order, id, "order")
    crud.delete(db, order, "order")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
