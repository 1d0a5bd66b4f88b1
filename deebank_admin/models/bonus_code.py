# deebank_admin/models/bonus_code.py
import uuid
from sqlalchemy import Column, String, Numeric, Date, DateTime
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class BonusCode(Base):
    __tablename__ = "codigos_bonus"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    codigo = Column(String(64), unique=True, index=True, nullable=False)
    valor = Column(Numeric(18, 2), nullable=False)
    data_expiracao = Column(Date, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "code": self.codigo,
            "value": self.valor,
            "expiry_date": self.data_expiracao.isoformat() if self.data_expiracao else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
