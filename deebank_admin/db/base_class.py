# deebank_admin/db/base_class.py
from deebank_admin.db.session import Base

# Import all models here so Base.metadata sees every backend table
from deebank_admin.models.profile import Profile  # noqa: F401
from deebank_admin.models.deposit import Deposit  # noqa: F401
from deebank_admin.models.withdrawal import Withdrawal  # noqa: F401
from deebank_admin.models.company_bank import CompanyBank  # noqa: F401
from deebank_admin.models.bonus_code import BonusCode  # noqa: F401
from deebank_admin.models.product import Product  # noqa: F401
from deebank_admin.models.support_links import SupportLinks  # noqa: F401
