# deebank_admin/models/__init__.py
from deebank_admin.db.session import Base

from .profile import Profile
from .deposit import Deposit
from .withdrawal import Withdrawal
from .company_bank import CompanyBank
from .bonus_code import BonusCode
from .product import Product
from .support_links import SupportLinks

__all__ = [
    "Base",
    "Profile",
    "Deposit",
    "Withdrawal",
    "CompanyBank",
    "BonusCode",
    "Product",
    "SupportLinks",
]
