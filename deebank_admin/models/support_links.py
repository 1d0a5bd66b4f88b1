# deebank_admin/models/support_links.py
import uuid
from sqlalchemy import Column, String
from deebank_admin.db.session import Base


class SupportLinks(Base):
    __tablename__ = "atendimento_links"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    whatsapp_gerente_url = Column(String, nullable=True)
    whatsapp_grupo_vendas_url = Column(String, nullable=True)
    telegram_canal_url = Column(String, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "whatsapp_manager_url": self.whatsapp_gerente_url or "",
            "whatsapp_sales_group_url": self.whatsapp_grupo_vendas_url or "",
            "telegram_channel_url": self.telegram_canal_url or "",
        }
