"""Domain modules package."""

from app.modules.lessons import models as lessons_models  # noqa: F401
from app.modules.orders import models as orders_models  # noqa: F401
