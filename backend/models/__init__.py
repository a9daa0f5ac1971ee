# Models package
from .user import HairProfile, CurrentRoutine
from .plan import RoutineTask, RoutinePlan, ArchivedPlan, RoutineEntry, GeneratedPlan, PlanGenerationResponse
from .record import StreakState, DailyCompletion, ActionUpdateRequest, TodayResponse
from .feedback import FeedbackRequest, WeeklyFeedback
from .lesson import Lesson, LessonQuestion, LessonCompletionRequest, AcademyProgress, LessonCompletion
