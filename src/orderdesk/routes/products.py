from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from orderdesk import crud
from orderdesk.db import get_db
from orderdesk.models import Product
from orderdesk.schemas import ProductCreate
from orderdesk.schemas import ProductPatch
from orderdesk.schemas import ProductRead

router = APIRouter(tags=["products"], default_response_class=JSONResponse)


@router.get("/product", response_model=list[ProductRead])
def list_products(db: Session = Depends(get_db)):
    return db.query(Product).order_by(Product.id).all()


@router.post("/product", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    return crud.create(db, Product(**data.model_dump()), "product")


@router.put("/product/{id}", response_model=ProductRead)
def replace_product(id: int, data: ProductCreate, db: Session = Depends(get_db)):
    product = crud.get_or_404(db, Product, id, "product")
    return crud.update(db, product, data.model_dump(exclude_unset=True), "product")


@router.patch("/product/{id}", response_model=ProductRead)
def update_product(id: int, data: ProductPatch, db: Session = Depends(get_db)):
    product = crud.get_or_404(db, Product, id, "product")
    return crud.update(db, product, data.model_dump(exclude_unset=True), "product")


@router.delete("/product/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(id: int, db: Session = Depends(get_db)):
    product = crud.get_or_404(db, Product, id, "product")
    crud.delete(db, product, "product")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
