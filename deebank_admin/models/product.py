# deebank_admin/models/product.py
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, Text
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class Product(Base):
    """Investment plan offered on the platform."""
    __tablename__ = "produtos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome = Column(String, nullable=False)
    categoria = Column(String, nullable=True)
    preco = Column(Numeric(18, 2), nullable=False)
    estado = Column(String(16), nullable=False, default="ACTIVE")  # ACTIVE, INACTIVE
    descricao = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.nome,
            "category": self.categoria,
            "price": self.preco,
            "status": self.estado,
            "description": self.descricao,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
