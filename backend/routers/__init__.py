from .profile import router as profile_router
from .plan import router as plan_router
from .today import router as today_router
from .stats import router as stats_router
from .feedback import router as feedback_router
from .lessons import router as lessons_router
