# deebank_admin/models/profile.py
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, Boolean
from deebank_admin.db.session import Base
from deebank_admin.utils.dates import utcnow


class Profile(Base):
    """Customer profile owned by the platform; the back office adjusts balance and withdrawal permission."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String, nullable=True)
    phone = Column(String(20), unique=True, index=True, nullable=False)
    saldo = Column(Numeric(18, 2), nullable=False, default=0)
    pode_sacar = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "phone": self.phone,
            "balance": self.saldo,
            "can_withdraw": self.pode_sacar,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
