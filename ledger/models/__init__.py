from ledger.models.models import *  # noqa: F401,F403
from ledger.models.models import __all__  # noqa: F401
