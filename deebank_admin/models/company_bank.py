# deebank_admin/models/company_bank.py
import uuid
from sqlalchemy import Column, String, Boolean, DateTime
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class CompanyBank(Base):
    """Company account customers transfer deposits to."""
    __tablename__ = "bancos_empresa"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome_do_banco = Column(String, nullable=False)
    iban = Column(String(64), nullable=False)
    nome_favorecido = Column(String, nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "bank_name": self.nome_do_banco,
            "iban": self.iban,
            "beneficiary": self.nome_favorecido,
            "active": self.ativo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
