# deebank_admin/models/withdrawal.py
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class Withdrawal(Base):
    __tablename__ = "retiradas"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    # Copied from the profile when the request is created
    telefone = Column(String(20), nullable=False, index=True)
    valor = Column(Numeric(18, 2), nullable=False)
    # pendente, aprovado, concluido, rejeitado
    status = Column(String(32), nullable=False, default="pendente", index=True)
    nome_do_banco = Column(String, nullable=True)
    iban = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
