# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float
from database import Base

# Model Product
# A single product on the shop shelf: name, unit price, stock on hand and
# an optional photo. Table and column names follow the shop's legacy MySQL
# schema so the service can run against the existing table.
class Product(Base):
    __tablename__ = "Final_Tic_Jum_Inventory"

    id = Column("Tic_Jum_ID_Product", Integer, primary_key=True, autoincrement=True)
    name = Column("Tic_Jum_Name", String(255), nullable=False)

    # Both numeric fields are nullable: bad input is stored as NULL, not rejected.
    # precision=53 renders as DOUBLE on MySQL; a bare FLOAT keeps ~7 digits.
    price = Column("Tic_jum_Price_Unit", Float(precision=53), nullable=True)
    quantity = Column("Tic_Jum_Qty_Stock", Integer, nullable=True)

    # Absolute URL into the image store.
    image_url = Column("Tic_Jum_Img_Path", String(512), nullable=True)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name!r}>"
