# deebank_admin/models/deposit.py
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class Deposit(Base):
    __tablename__ = "depositos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    valor = Column(Numeric(18, 2), nullable=False)
    # pendente, recarregado, rejeitado (older rows may say aprovado)
    estado = Column(String(32), nullable=False, default="pendente", index=True)
    nome_do_banco = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
