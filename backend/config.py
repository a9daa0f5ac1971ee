import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB配置
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "hair_coach")

# JWT配置
JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_HOURS = 24 * 7  # 7天过期

# 远程计划生成服务
PLAN_GENERATOR_URL = os.getenv(
    "PLAN_GENERATOR_URL",
    "http://localhost:5001/createAIHairPlan",
)
PLAN_REGENERATOR_URL = os.getenv(
    "PLAN_REGENERATOR_URL",
    "http://localhost:5001/regenerateAIHairPlan",
)
PLAN_GENERATOR_TIMEOUT = float(os.getenv("PLAN_GENERATOR_TIMEOUT", "120"))

# 写入重试
WRITE_RETRIES = int(os.getenv("WRITE_RETRIES", "3"))
WRITE_RETRY_DELAY = float(os.getenv("WRITE_RETRY_DELAY", "0.2"))  # 秒，指数退避基数
STREAK_CAS_ATTEMPTS = int(os.getenv("STREAK_CAS_ATTEMPTS", "5"))

# 日志
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")

# 服务器配置
API_PREFIX = "/api"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

DATE_FORMAT = "%Y-%m-%d"
