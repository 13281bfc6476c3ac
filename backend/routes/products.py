# backend/routes/products.py
import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from starlette.datastructures import UploadFile as FormFile

from database import get_db
from models.product import Product
from utils.audit import write_log
from utils.images import ImageStore, get_image_store
import schemas.product as product_schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])

_ID_RE = re.compile(r"^\s*[+-]?\d+\s*$")

# Signed 64-bit range of the id column; larger ints overflow the DB drivers
_MAX_ID = 2 ** 63 - 1

# Driver errors that are not wrapped in SQLAlchemyError (e.g. sqlite3 int overflow)
DB_ERRORS = (SQLAlchemyError, OverflowError)


# ---- HELPERS ----
def valid_product_id(product_id: str) -> int:
    """Path id as an int; anything non-numeric is rejected before touching the database."""
    if not _ID_RE.match(product_id):
        raise HTTPException(status_code=400, detail="Invalid id")
    pid = int(product_id)
    # Nothing outside the column range can exist
    if abs(pid) > _MAX_ID:
        raise HTTPException(status_code=404, detail="Product not found")
    return pid


async def read_product_form(request: Request) -> product_schemas.ProductForm:
    """Collect product fields from a multipart, urlencoded or JSON body."""
    content_type = request.headers.get("content-type", "")
    payload = {}

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object")
        payload = {k: v for k, v in body.items() if k not in product_schemas.IMAGE_KEYS}
    else:
        form = await request.form()
        for key in form.keys():
            value = form.getlist(key)[0]
            if key in product_schemas.IMAGE_KEYS:
                # Empty file inputs arrive as a blank string or a nameless part
                if not isinstance(value, FormFile) or not value.filename:
                    continue
            elif isinstance(value, FormFile):
                continue
            payload[key] = value

    try:
        return product_schemas.ProductForm.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise HTTPException(status_code=400, detail=f"Invalid product fields: {fields}")


def _server_error(db: Session, e: Exception, what: str) -> HTTPException:
    db.rollback()
    logger.exception("%s failed", what)
    return HTTPException(status_code=500, detail=str(e))


def _load_or_404(db: Session, product_id: int) -> Product:
    try:
        product = db.query(Product).filter(Product.id == product_id).first()
    except DB_ERRORS as e:
        raise _server_error(db, e, f"Loading product {product_id}")
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def _store_image(images: ImageStore, upload: Optional[UploadFile]) -> Optional[str]:
    if upload is None:
        return None
    try:
        return images.save(upload)
    except OSError as e:
        logger.exception("Saving upload %s failed", upload.filename)
        raise HTTPException(status_code=500, detail=f"File save error: {e}")


def _commit_or_discard(db: Session, images: ImageStore, new_filename: Optional[str], what: str):
    """Commit the session; on failure drop the freshly stored image so no orphan is left."""
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if new_filename:
            images.remove(new_filename)
        raise HTTPException(status_code=404, detail="Product not found")
    except DB_ERRORS as e:
        if new_filename:
            images.remove(new_filename)
        raise _server_error(db, e, what)


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=List[product_schemas.ProductOut])
def list_products(db: Session = Depends(get_db)):
    try:
        products = db.query(Product).order_by(Product.id.desc()).all()
    except DB_ERRORS as e:
        raise _server_error(db, e, "Listing products")
    return [product_schemas.ProductOut.model_validate(p) for p in products]


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    pid: int = Depends(valid_product_id),
    db: Session = Depends(get_db),
):
    product = _load_or_404(db, pid)
    return product_schemas.ProductOut.model_validate(product)


# =========================
# CREATE PRODUCT
# =========================
@router.post("/products", status_code=201, response_model=product_schemas.ProductCreated)
def add_product(
    request: Request,
    form: product_schemas.ProductForm = Depends(read_product_form),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    if not form.clean_name():
        raise HTTPException(status_code=400, detail="Name is required.")

    # File first; the row only references it once the insert has committed.
    filename = _store_image(images, form.image)

    new_product = Product(
        name=form.name,
        price=product_schemas.to_number_or_none(form.price),
        quantity=product_schemas.to_quantity_or_none(form.quantity),
        image_url=images.url_for(filename) if filename else None,
    )
    db.add(new_product)
    _commit_or_discard(db, images, filename, "Creating product")
    db.refresh(new_product)

    write_log(
        action="PRODUCT_CREATE", resource="products", status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"id": new_product.id, "image": filename},
    )

    return {
        "success": True,
        "productId": new_product.id,
        "product": product_schemas.ProductOut.model_validate(new_product),
    }


# =========================
# UPDATE PRODUCT (Form + File)
# =========================
@router.put("/products/{product_id}", response_model=product_schemas.ProductUpdated)
def update_product(
    request: Request,
    pid: int = Depends(valid_product_id),
    form: product_schemas.ProductForm = Depends(read_product_form),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    p = _load_or_404(db, pid)
    old_image_url = p.image_url

    # Only supplied fields change; blank numbers keep the stored value.
    # Names are stored as sent, like on create.
    if form.name is not None:
        p.name = form.name
    if product_schemas.is_supplied(form.price):
        p.price = product_schemas.to_number_or_none(form.price)
    if product_schemas.is_supplied(form.quantity):
        p.quantity = product_schemas.to_quantity_or_none(form.quantity)

    filename = _store_image(images, form.image)
    if filename:
        p.image_url = images.url_for(filename)

    _commit_or_discard(db, images, filename, f"Updating product {pid}")
    db.refresh(p)

    # The old photo goes only after the new reference is committed.
    if filename and old_image_url:
        images.remove_by_url(old_image_url)

    write_log(
        action="PRODUCT_EDIT", resource="products", status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"product_id": p.id, "image_replaced": bool(filename)},
    )

    return {"success": True, "product": product_schemas.ProductOut.model_validate(p)}


# =========================
# DELETE PRODUCT
# =========================
@router.delete("/products/{product_id}", response_model=product_schemas.ProductDeleted)
def delete_product(
    request: Request,
    pid: int = Depends(valid_product_id),
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store),
):
    product = _load_or_404(db, pid)
    image_url = product.image_url

    try:
        deleted = (
            db.query(Product)
            .filter(Product.id == pid)
            .delete(synchronize_session=False)
        )
        db.commit()
    except DB_ERRORS as e:
        raise _server_error(db, e, f"Deleting product {pid}")

    # Row vanished between the lookup and the delete
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Product not found or already deleted")

    if image_url:
        images.remove_by_url(image_url)

    write_log(
        action="PRODUCT_DELETE", resource="products", status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"id": pid},
    )
    return {"success": True, "message": "Product deleted"}
