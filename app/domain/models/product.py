"""Product domain model — maps to the 'productos' table."""

from sqlalchemy import Column, Integer, Numeric, Text

from app.infrastructure.database import Base


class Product(Base):
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, autoincrement=True)

    nombre = Column(Text, nullable=False)
    tipo_producto = Column(Text, nullable=True)
    costo_venta = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    cantidad_disponible = Column(Integer, nullable=True)
    # FK to proveedores is declared in the database schema, not here
    proveedor_id = Column(Integer, nullable=True)
    material = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Product {self.id} - {self.nombre}>"
